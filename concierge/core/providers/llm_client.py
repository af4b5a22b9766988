"""
Language-model completions over an OpenAI-compatible chat endpoint.

Works against OpenAI, Groq or any server exposing POST {base_url}/chat/completions.
"""

import logging
from typing import Optional
import httpx

from concierge.core.capabilities import LanguageModel
from concierge.core.errors import LanguageModelAuthError, LanguageModelError

logger = logging.getLogger("llm_client")

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"


class ChatCompletionsClient(LanguageModel):
    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        if not self.api_key:
            logger.warning("LLM_API_KEY not set. Language-model replies will return a configuration notice.")
        else:
            logger.info("ChatCompletionsClient initialized with model: %s", self.model)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, system_prompt: str, user_content: str, max_tokens: int, temperature: float) -> str:
        if not self.api_key:
            raise LanguageModelAuthError("LLM_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(f"{self.base_url}/chat/completions", json=payload, headers=headers)
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                logger.error("LLM server error: %s %s", status, e.response.text[:200])
                if status == 401:
                    raise LanguageModelAuthError() from e
                raise LanguageModelError(f"LLM request failed with status {status}") from e
            except httpx.HTTPError as e:
                logger.error("LLM network error: %s", e)
                raise LanguageModelError(f"LLM request failed: {e}") from e
            except ValueError as e:
                raise LanguageModelError("LLM returned invalid JSON") from e

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LanguageModelError("LLM response had no choices") from e
        return (content or "").strip()
