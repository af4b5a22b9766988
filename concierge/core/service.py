import logging
from typing import Optional

from .bus import Bus
from .contracts import ANONYMOUS, Answer, ChatAnswered, Query
from .errors import MessageRequired
from .router import Router

class ChatService:
    """
    Entry point used by the HTTP server, CLI and REPL.

    produce_answer() validates and answers; record() hands the finished
    exchange to whoever listens on 'chat.answered' (the ChatRecorder).
    """

    def __init__(self, router: Router, bus: Optional[Bus] = None):
        self.router = router
        self.bus = bus
        self.log = logging.getLogger("service")

    async def produce_answer(self, message: Optional[str], user_id: Optional[str] = None) -> Answer:
        if not isinstance(message, str) or not message.strip():
            raise MessageRequired()
        query = Query(text=message.strip(), user_id=user_id or ANONYMOUS)
        answer = await self.router.answer(query)
        self.log.info("Service: Answered %s (intent: %s)", query.user_id, answer.intent or "-")
        return answer

    async def record(self, user_id: Optional[str], message: str, answer: Answer) -> None:
        if self.bus is None:
            return
        event = ChatAnswered(
            user_id=user_id or ANONYMOUS,
            message=message,
            response=answer.text,
            intent=answer.intent,
        )
        await self.bus.publish(event.topic, event.dict())
