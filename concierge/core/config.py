"""
Configuration management for Concierge.

Reads environment variables (and a .env file when present) to pick the
pipeline mode, the language-model endpoint and the chat store.
"""

import os
import logging
from typing import Literal, Optional
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("config")

env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    logger.debug("Loaded .env file from %s", env_path)
else:
    load_dotenv()


class Config:
    """
    Centralized configuration for Concierge.

    Reads from environment variables with sensible defaults.
    """

    # Pipeline
    PIPELINE_MODE: Literal["rules", "model"] = os.getenv("PIPELINE_MODE", "rules")
    DEFAULT_LOCATION: str = os.getenv("DEFAULT_LOCATION", "London")

    # Language model (any OpenAI-compatible endpoint)
    LLM_API_KEY: Optional[str] = os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY")
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30.0"))

    # Lookup providers
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))

    # Chat history
    CHAT_STORE: Literal["memory", "jsonl"] = os.getenv("CHAT_STORE", "memory")
    CHAT_STORE_PATH: Optional[str] = os.getenv("CHAT_STORE_PATH", None)
    # reminders use the same store kind as chat history
    REMINDER_STORE_PATH: Optional[str] = os.getenv("REMINDER_STORE_PATH", None)

    # HTTP server
    SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
    SERVER_PORT: int = int(os.getenv("SERVER_PORT", "3000"))

    @classmethod
    def get_weather_lookup(cls):
        from concierge.core.providers.open_meteo import OpenMeteoAdapter
        return OpenMeteoAdapter(timeout=cls.HTTP_TIMEOUT)

    @classmethod
    def get_encyclopedia(cls):
        from concierge.core.providers.wikipedia import WikipediaAdapter
        return WikipediaAdapter(timeout=cls.HTTP_TIMEOUT)

    @classmethod
    def get_web_search(cls):
        from concierge.core.providers.duckduckgo import DuckDuckGoAdapter
        return DuckDuckGoAdapter(timeout=cls.HTTP_TIMEOUT)

    @classmethod
    def get_language_model(cls):
        """
        Get the language-model client.

        Returns:
            ChatCompletionsClient; unconfigured (no key) clients still construct
            and report a configuration notice when asked to complete.
        """
        from concierge.core.providers.llm_client import ChatCompletionsClient
        logger.info("Using language model %s at %s", cls.LLM_MODEL, cls.LLM_BASE_URL)
        return ChatCompletionsClient(
            api_key=cls.LLM_API_KEY,
            model=cls.LLM_MODEL,
            base_url=cls.LLM_BASE_URL,
            timeout=cls.LLM_TIMEOUT,
        )

    @classmethod
    def get_chat_store(cls):
        from concierge.core.store import open_store
        logger.info("Using %s chat store%s", cls.CHAT_STORE,
                    f" at {cls.CHAT_STORE_PATH}" if cls.CHAT_STORE_PATH else "")
        return open_store(cls.CHAT_STORE, cls.CHAT_STORE_PATH)

    @classmethod
    def get_reminder_store(cls):
        from concierge.core.store import open_reminder_store
        return open_reminder_store(cls.CHAT_STORE, cls.REMINDER_STORE_PATH)

    @classmethod
    def print_config(cls):
        """Print current configuration (useful for debugging)."""
        print("\nConcierge Configuration:")
        print(f"  Pipeline Mode: {cls.PIPELINE_MODE}")
        print(f"  Default Location: {cls.DEFAULT_LOCATION}")
        print(f"  Language Model: {cls.LLM_MODEL} ({'configured' if cls.LLM_API_KEY else 'not configured'})")
        print(f"    Endpoint: {cls.LLM_BASE_URL}")
        print(f"  Chat Store: {cls.CHAT_STORE}")
        if cls.CHAT_STORE == "jsonl":
            print(f"    Path: {cls.CHAT_STORE_PATH}")
            print(f"    Reminders: {cls.REMINDER_STORE_PATH}")
        print(f"  Server: {cls.SERVER_HOST}:{cls.SERVER_PORT}")
        print()
