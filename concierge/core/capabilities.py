"""
Interfaces for the external capabilities the skills are built on.

Concrete HTTP adapters live in concierge.core.providers; tests substitute
in-process fakes.
"""
from typing import Optional
from concierge.core.contracts import Forecast


class WeatherLookup:
    async def geocode_and_forecast(self, location: str) -> Optional[Forecast]:
        """Resolve a place name and return its current weather, or None when no place matches."""
        raise NotImplementedError


class Encyclopedia:
    async def summary(self, topic: str) -> Optional[str]:
        """Return a short summary of the topic, or None when there is no article."""
        raise NotImplementedError


class WebSearch:
    async def search(self, query: str) -> str:
        """Return the best instant answer for the query, or "" when nothing was found."""
        raise NotImplementedError


class LanguageModel:
    @property
    def configured(self) -> bool:
        return True

    async def complete(
        self,
        system_prompt: str,
        user_content: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Return the model's reply.

        Raises:
            LanguageModelAuthError: credential missing or rejected
            LanguageModelError: any other failure
        """
        raise NotImplementedError
