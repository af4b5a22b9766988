"""
Exception hierarchy for the answering pipeline.

Only MessageRequired is meant to reach HTTP callers; the capability errors
are raised by adapters and turned into sentinel text by the skills.
"""
from typing import Optional


class ConciergeError(Exception):
    """Base error. Carries an HTTP status and a short machine-readable code."""
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class MessageRequired(ConciergeError):
    """Raised when a request carries no message text."""
    status_code = 400
    error_code = "message_required"

    def __init__(self, message: str = "Message is required", field: str = "message"):
        super().__init__(message, details=f"field={field}")
        self.field = field


class CapabilityError(ConciergeError):
    """An external lookup failed or returned an unusable shape."""
    status_code = 503
    error_code = "capability_unavailable"

    def __init__(self, capability: str, message: str = "Capability unavailable"):
        super().__init__(message, details=f"capability={capability}")
        self.capability = capability


class LanguageModelError(CapabilityError):
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "Language model unavailable"):
        super().__init__("llm", message)


class LanguageModelAuthError(LanguageModelError):
    """Missing or rejected API credential."""
    status_code = 401
    error_code = "llm_unauthorized"

    def __init__(self, message: str = "Language model API key missing or invalid"):
        super().__init__(message)


class ArithmeticParseError(ConciergeError):
    status_code = 400
    error_code = "arithmetic_error"

    def __init__(self, expression: str, reason: str = "invalid expression"):
        super().__init__(f"Cannot evaluate {expression!r}: {reason}")
        self.expression = expression
        self.reason = reason
