import logging
import re

from concierge.core.capabilities import Encyclopedia
from concierge.core.contracts import Query, ResolverResult
from concierge.core.errors import CapabilityError
from concierge.skills.base import Resolver

logger = logging.getLogger("knowledge_skill")

_PHRASES = re.compile(r"who is|what is|define", re.I)

NOT_FOUND = "Unable to find information."


def extract_subject(text: str) -> str:
    """Drop every classifying phrase and trim what is left."""
    return _PHRASES.sub("", text or "").strip().rstrip("?").strip()


class KnowledgeSkill(Resolver):
    name = "knowledge"

    def __init__(self, encyclopedia: Encyclopedia):
        self.encyclopedia = encyclopedia

    async def resolve(self, query: Query) -> ResolverResult:
        subject = extract_subject(query.text)
        if not subject:
            return ResolverResult.declined(NOT_FOUND)

        logger.info("KnowledgeSkill: Looking up '%s'", subject)
        try:
            summary = await self.encyclopedia.summary(subject)
        except CapabilityError as e:
            logger.warning("KnowledgeSkill: Lookup failed for '%s': %s", subject, e)
            return ResolverResult.declined(NOT_FOUND)

        if not summary:
            return ResolverResult.declined(NOT_FOUND)
        return ResolverResult.ok(summary)
