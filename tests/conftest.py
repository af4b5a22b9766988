"""In-process fakes for the external capabilities."""
import pytest

from concierge.core.capabilities import Encyclopedia, LanguageModel, WeatherLookup, WebSearch
from concierge.core.contracts import Forecast
from concierge.core.errors import CapabilityError


class FakeWeather(WeatherLookup):
    def __init__(self, places=None, fail=False, fail_for=()):
        self.places = places if places is not None else {"London": Forecast("London", 12.5, 9.0)}
        self.fail = fail
        self.fail_for = set(fail_for)
        self.calls = []

    async def geocode_and_forecast(self, location):
        self.calls.append(location)
        if self.fail or location in self.fail_for:
            raise CapabilityError("weather", "down")
        return self.places.get(location)


class FakeEncyclopedia(Encyclopedia):
    def __init__(self, articles=None, fail=False):
        self.articles = articles or {}
        self.fail = fail
        self.calls = []

    async def summary(self, topic):
        self.calls.append(topic)
        if self.fail:
            raise CapabilityError("encyclopedia", "down")
        return self.articles.get(topic)


class FakeSearch(WebSearch):
    def __init__(self, result="", fail=False):
        self.result = result
        self.fail = fail
        self.calls = []

    async def search(self, query):
        self.calls.append(query)
        if self.fail:
            raise CapabilityError("search", "down")
        return self.result


class FakeLLM(LanguageModel):
    """Replies with a fixed text, or raises the given error."""

    def __init__(self, reply="model reply", error=None, errors=None):
        self.reply = reply
        self.error = error
        self.errors = list(errors or [])   # raised once each, in order, before `error`
        self.calls = []

    async def complete(self, system_prompt, user_content, max_tokens, temperature):
        self.calls.append(
            {"system": system_prompt, "user": user_content, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.errors:
            raise self.errors.pop(0)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def weather():
    return FakeWeather()


@pytest.fixture
def encyclopedia():
    return FakeEncyclopedia({"Ada Lovelace": "Ada Lovelace was an English mathematician."})


@pytest.fixture
def web():
    return FakeSearch()


@pytest.fixture
def llm():
    return FakeLLM()
