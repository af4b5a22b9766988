"""
Model-augmented answering: web search for context, language-model synthesis
over it, and a direct completion when search has nothing usable.
"""

import logging

from concierge.core.capabilities import LanguageModel, WebSearch
from concierge.core.contracts import Query, ResolverResult
from concierge.core.errors import LanguageModelAuthError, LanguageModelError
from concierge.core.fallback import FallbackChain
from concierge.skills.base import Resolver
from concierge.skills.search import usable

logger = logging.getLogger("chat_skill")

ASSISTANT_PROMPT = (
    "You are a helpful AI assistant. Provide accurate, concise, and friendly responses. "
    "If asked about current events or real-time information, indicate that you may not have the latest data."
)
SYNTHESIS_PROMPT = (
    "You are a helpful search assistant. Synthesize the provided search results into a clear, concise answer."
)

NOT_CONFIGURED = "The language model API key is not configured. Please add LLM_API_KEY to the environment."
MODEL_ERROR = "I encountered an error processing your request. Please try again."


class ChatSkill(Resolver):
    name = "chat"

    def __init__(self, llm: LanguageModel, web: WebSearch):
        self.llm = llm
        self.web = web
        self.chain = FallbackChain(
            "chat",
            [self._search_and_synthesize, self._direct],
            terminal=lambda q: MODEL_ERROR,
        )

    async def resolve(self, query: Query) -> ResolverResult:
        logger.info("ChatSkill: Generating response for: '%s'", query.text)
        return await self.chain.run(query)

    async def _search_and_synthesize(self, query: Query) -> ResolverResult:
        # Errors here propagate so the chain moves on to the direct completion.
        context = await self.web.search(query.text)
        if not usable(context):
            logger.info("ChatSkill: No search context, answering directly")
            return ResolverResult.declined()

        reply = await self.llm.complete(
            SYNTHESIS_PROMPT,
            f"User query: {query.text}\n\nSearch results: {context}\n\n"
            "Provide a clear answer based on these results.",
            max_tokens=300,
            temperature=0.5,
        )
        return ResolverResult.ok(reply) if reply else ResolverResult.declined()

    async def _direct(self, query: Query) -> ResolverResult:
        try:
            reply = await self.llm.complete(ASSISTANT_PROMPT, query.text, max_tokens=500, temperature=0.7)
        except LanguageModelAuthError as e:
            logger.error("ChatSkill: %s", e)
            return ResolverResult.declined(NOT_CONFIGURED)
        except LanguageModelError as e:
            logger.error("ChatSkill: %s", e)
            return ResolverResult.declined(MODEL_ERROR)

        if not reply:
            return ResolverResult.declined(MODEL_ERROR)
        return ResolverResult.ok(reply)
