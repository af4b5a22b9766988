"""Simple async pub/sub event bus"""

from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List
import asyncio
import logging

Subscriber = Callable[[Dict[str, Any]], Awaitable[None]]

class Bus:
    def __init__(self):
        self._subs: Dict[str, List[Subscriber]] = defaultdict(list)
        self._log = logging.getLogger("bus")

    def subscribe(self, topic: str, fn: Subscriber):
        self._subs[topic].append(fn)
        self._log.debug("subscribe: %s -> %s (total subscribers: %d)",
                        topic, getattr(fn, "__name__", str(fn)), len(self._subs[topic]))

    async def publish(self, topic: str, payload: Dict[str, Any]):
        subscribers = self._subs.get(topic, [])
        if not subscribers:
            self._log.debug("publish: No subscribers for topic %s", topic)
            return
        tasks = [asyncio.create_task(fn(payload)) for fn in subscribers]
        # subscriber failures are logged, never raised to the publisher
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for fn, result in zip(subscribers, results):
            if isinstance(result, Exception):
                self._log.error("publish: Subscriber %s on %s raised: %s",
                                getattr(fn, "__name__", str(fn)), topic, result, exc_info=result)

    def clear(self):
        self._subs.clear()
