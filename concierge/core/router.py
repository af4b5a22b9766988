import logging
from typing import Dict, Literal, Optional

from .contracts import Answer, Query
from .errors import MessageRequired
from .nlu.rules import RulesNLU
from concierge.skills.base import Resolver

PipelineMode = Literal["rules", "model"]

ERROR_TEXT = "I encountered an error processing your request. Please try again."

class Router:
    """
    Turns a Query into an Answer.

      - "rules": classify, then hand the query to the single skill registered
        for that intent (intent name == skill name unless overridden).
      - "model": no classification; the model skill answers everything.

    Whatever the chosen skill returns, sentinel or not, is the final text.
    """

    def __init__(self, skills: Dict[str, Resolver], mode: PipelineMode = "rules",
                 nlu: Optional[RulesNLU] = None, model_skill: str = "chat"):
        if mode not in ("rules", "model"):
            raise ValueError(f"Unknown pipeline mode: {mode!r}")
        self.skills = dict(skills)
        self.mode = mode
        self.nlu = nlu or RulesNLU()
        self.model_skill = model_skill
        # Identity by default; override via register_intent when necessary.
        self.intent_to_skill: dict[str, str] = {}
        self.log = logging.getLogger("router")

    def register_intent(self, intent: str, skill: str) -> None:
        self.intent_to_skill[intent] = skill

    def _resolve_skill(self, intent: str) -> str:
        return self.intent_to_skill.get(intent, intent)

    async def answer(self, query: Query) -> Answer:
        if not query.text or not query.text.strip():
            raise MessageRequired()

        if self.mode == "model":
            text = await self._invoke(self.model_skill, query)
            return Answer(text=text)

        result = self.nlu.classify(query.text)
        intent = result.intent.value
        skill = self._resolve_skill(intent)
        self.log.info("Router: '%s' -> intent %s -> skill %s", result.original_text, intent, skill)
        text = await self._invoke(skill, query)
        return Answer(text=text, intent=intent)

    async def _invoke(self, name: str, query: Query) -> str:
        skill = self.skills.get(name)
        if skill is None:
            self.log.error("Router: No skill registered as %s", name)
            return ERROR_TEXT
        try:
            result = await skill.resolve(query)
        except Exception as e:
            self.log.exception("Router: Skill %s raised: %s", name, e)
            return ERROR_TEXT
        return result.text or ERROR_TEXT
