import re
from typing import Callable
from .types import Intent, NLUResult

# digits, operator, digits; parentheses may wrap either operand
_ARITHMETIC = re.compile(r"\d+\s*\)*\s*[+\-*/]\s*\(*\s*\d+")
_KNOWLEDGE_PHRASES = ("who is", "what is", "define")

Predicate = Callable[[str], bool]

def _contains(*words: str) -> Predicate:
    return lambda t: any(w in t for w in words)

# Order matters: "what is the weather" must stay weather, "what is 2+2" must stay math.
RULES: list[tuple[Predicate, Intent, float]] = [
    (_contains("weather", "temperature"), Intent.WEATHER, 0.8),
    (_contains("time", "date"),           Intent.TIME,    0.8),
    (lambda t: bool(_ARITHMETIC.search(t)), Intent.MATH,  0.9),
    (_contains(*_KNOWLEDGE_PHRASES),      Intent.KNOWLEDGE, 0.6),
]

def classify(text: str) -> Intent:
    """First matching rule wins; anything unmatched is general."""
    t = (text or "").lower()
    for matches, intent, _ in RULES:
        if matches(t):
            return intent
    return Intent.GENERAL

class RulesNLU:
    def classify(self, text: str) -> NLUResult:
        t = (text or "").strip()
        low = t.lower()
        for matches, intent, confidence in RULES:
            if matches(low):
                return NLUResult(intent, confidence, t)
        return NLUResult(Intent.GENERAL, 0.1, t)
