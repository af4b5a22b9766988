from dataclasses import dataclass, asdict, field
from typing import Any, Optional
import time
import uuid

ANONYMOUS = "anonymous"

# Pipeline values

@dataclass(frozen=True, slots=True)
class Query:
    text: str
    user_id: str = ANONYMOUS

@dataclass(slots=True)
class ResolverResult:
    text: str = ""
    succeeded: bool = False

    @classmethod
    def ok(cls, text: str) -> "ResolverResult":
        return cls(text=text, succeeded=True)

    @classmethod
    def declined(cls, text: str = "") -> "ResolverResult":
        return cls(text=text, succeeded=False)

@dataclass(slots=True)
class Answer:
    text: str
    intent: Optional[str] = None   # only set by the rule-routed pipeline

    def dict(self) -> dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True, slots=True)
class Forecast:
    resolved_name: str
    temperature_c: float
    wind_speed_kph: float

# Base Event
@dataclass(slots=True)
class Event:
    topic: str
    ts_ms: int = field(default_factory=lambda: int(time.time() * 1000))
    corr_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def dict(self) -> dict[str, Any]:
        return asdict(self)

@dataclass(slots=True)
class ChatAnswered(Event):
    topic: str = "chat.answered"
    user_id: str = ANONYMOUS
    message: str = ""
    response: str = ""
    intent: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("ChatAnswered requires a non-empty message")

def to_dict(e: Event) -> dict[str, Any]:
    """Serialize any Event to a dict for the Bus or logging."""
    return e.dict()
