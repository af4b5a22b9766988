import logging

from concierge.core.capabilities import WebSearch
from concierge.core.contracts import Query, ResolverResult
from concierge.core.fallback import FallbackChain
from concierge.skills.base import Resolver

logger = logging.getLogger("search_skill")

# Marker strings some providers return instead of an empty body.
NO_RESULT_MARKERS = frozenset({"No results found.", "Search unavailable."})


def usable(result: str) -> bool:
    return bool(result) and result.strip() not in NO_RESULT_MARKERS


def acknowledgment(query: Query) -> str:
    return f'I received your message: "{query.text}". I\'m still learning how to answer that one.'


class SearchSkill(Resolver):
    """General questions: web search first, then a canned acknowledgment."""

    name = "general"

    def __init__(self, web: WebSearch):
        self.web = web
        self.chain = FallbackChain("search", [self._web_search], terminal=acknowledgment)

    async def resolve(self, query: Query) -> ResolverResult:
        return await self.chain.run(query)

    async def _web_search(self, query: Query) -> ResolverResult:
        result = await self.web.search(query.text)
        if not usable(result):
            logger.info("SearchSkill: No usable result for '%s'", query.text)
            return ResolverResult.declined()
        return ResolverResult.ok(result.strip())
