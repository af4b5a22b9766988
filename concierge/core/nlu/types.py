from dataclasses import dataclass
from enum import Enum

class Intent(str, Enum):
    WEATHER = "weather"
    TIME = "time"
    MATH = "math"
    KNOWLEDGE = "knowledge"
    GENERAL = "general"

@dataclass(slots=True)
class NLUResult:
    intent: Intent = Intent.GENERAL
    confidence: float = 0.0
    original_text: str = ""
