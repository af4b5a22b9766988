import logging
from typing import Optional
from urllib.parse import quote
import httpx

from concierge.core.capabilities import Encyclopedia
from concierge.core.errors import CapabilityError

logger = logging.getLogger("wikipedia")

SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/"


class WikipediaAdapter(Encyclopedia):
    """Page summaries from the Wikipedia REST API."""

    def __init__(self, timeout: float = 10.0, base_url: str = SUMMARY_URL):
        self.timeout = timeout
        self.base_url = base_url

    async def summary(self, topic: str) -> Optional[str]:
        url = self.base_url + quote(topic, safe="")
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url)
                if response.status_code == 404:
                    logger.info("No article for '%s'", topic)
                    return None
                response.raise_for_status()
                extract = (response.json().get("extract") or "").strip()
                return extract or None
            except httpx.HTTPError as e:
                logger.error("Wikipedia request failed for '%s': %s", topic, e)
                raise CapabilityError("encyclopedia", f"Encyclopedia lookup failed: {e}") from e
            except (ValueError, AttributeError) as e:
                raise CapabilityError("encyclopedia", "Unexpected encyclopedia payload") from e
