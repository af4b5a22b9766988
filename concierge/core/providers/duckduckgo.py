import logging
import httpx

from concierge.core.capabilities import WebSearch
from concierge.core.errors import CapabilityError

logger = logging.getLogger("duckduckgo")

INSTANT_ANSWER_URL = "https://api.duckduckgo.com/"


class DuckDuckGoAdapter(WebSearch):
    """DuckDuckGo Instant Answer API: the abstract text, else the direct answer."""

    def __init__(self, timeout: float = 10.0, base_url: str = INSTANT_ANSWER_URL):
        self.timeout = timeout
        self.base_url = base_url

    async def search(self, query: str) -> str:
        params = {"q": query, "format": "json", "no_html": 1}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise ValueError("search payload is not an object")
            except httpx.HTTPError as e:
                logger.error("Search request failed: %s", e)
                raise CapabilityError("search", f"Search unavailable: {e}") from e
            except ValueError as e:
                raise CapabilityError("search", "Unexpected search payload") from e

        text = data.get("AbstractText") or data.get("Answer") or ""
        if not isinstance(text, str):
            text = str(text)
        logger.debug("Search result for '%s': %s", query, text[:50] if text else "(empty)")
        return text.strip()
