import asyncio
import logging
from .contracts import ChatAnswered
from .store import ChatStore

class ChatRecorder:
    """
    Listens on 'chat.answered' and appends the exchange to the chat store.
    A store that is not ready, or that fails, never affects the answer.
    """

    def __init__(self, bus, store: ChatStore):
        self.bus = bus
        self.store = store
        self.log = logging.getLogger("recorder")

    async def start(self):
        self.bus.subscribe("chat.answered", self._on_answered)

    async def _on_answered(self, payload: dict):
        try:
            event = ChatAnswered(**payload)
        except Exception:
            self.log.warning("Recorder: Malformed chat.answered event, skipping")
            return

        if not self.store.is_ready():
            self.log.info("Recorder: Store not ready, chat not saved")
            return

        try:
            # file-backed stores block; keep them off the event loop
            await asyncio.to_thread(self.store.record_chat, event.user_id, event.message, event.response)
            self.log.debug("Recorder: Saved chat for %s", event.user_id)
        except Exception as e:
            self.log.exception("Recorder: Failed to save chat: %s", e)
