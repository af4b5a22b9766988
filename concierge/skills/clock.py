from datetime import datetime
from typing import Callable

from concierge.core.contracts import Query, ResolverResult
from concierge.skills.base import Resolver


class ClockSkill(Resolver):
    """Answers from the local clock; cannot fail."""

    name = "time"

    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self.now = now

    async def resolve(self, query: Query) -> ResolverResult:
        current = self.now()
        return ResolverResult.ok(
            f"The current date and time is {current.strftime('%A, %B %d, %Y %I:%M %p')}."
        )
