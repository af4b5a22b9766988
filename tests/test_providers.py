"""
Tests for the HTTP capability adapters.
"""
import pytest
from unittest.mock import AsyncMock, patch
import httpx

from concierge.core.errors import CapabilityError, LanguageModelAuthError, LanguageModelError
from concierge.core.providers.duckduckgo import DuckDuckGoAdapter
from concierge.core.providers.llm_client import ChatCompletionsClient
from concierge.core.providers.open_meteo import OpenMeteoAdapter
from concierge.core.providers.wikipedia import WikipediaAdapter
from concierge.core.contracts import Query
from concierge.skills import knowledge
from concierge.skills.knowledge import KnowledgeSkill

pytestmark = pytest.mark.asyncio


def _response(status, json=None, method="GET", url="http://test"):
    return httpx.Response(status, json=json, request=httpx.Request(method, url))


async def test_open_meteo_success():
    geo = _response(200, {"results": [{"name": "Paris", "latitude": 48.85, "longitude": 2.35}]})
    weather = _response(200, {"current_weather": {"temperature": 18.2, "windspeed": 11.0}})

    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = [geo, weather]
        forecast = await OpenMeteoAdapter().geocode_and_forecast("Paris")

    assert forecast.resolved_name == "Paris"
    assert forecast.temperature_c == 18.2
    assert forecast.wind_speed_kph == 11.0
    assert mock_get.call_count == 2
    assert mock_get.call_args_list[0].kwargs["params"] == {"name": "Paris", "count": 1}

async def test_open_meteo_no_match():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, {"generationtime_ms": 0.1})
        assert await OpenMeteoAdapter().geocode_and_forecast("Atlantis") is None
        assert mock_get.call_count == 1

async def test_open_meteo_network_error():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = httpx.ConnectError("unreachable")
        with pytest.raises(CapabilityError):
            await OpenMeteoAdapter().geocode_and_forecast("Paris")

async def test_open_meteo_bad_payload():
    geo = _response(200, {"results": [{"name": "Paris", "latitude": 1, "longitude": 2}]})
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = [geo, _response(200, {"unexpected": True})]
        with pytest.raises(CapabilityError):
            await OpenMeteoAdapter().geocode_and_forecast("Paris")


async def test_wikipedia_summary():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, {"extract": "Ada Lovelace was a mathematician."})
        text = await WikipediaAdapter().summary("Ada Lovelace")
    assert text == "Ada Lovelace was a mathematician."
    assert mock_get.call_args.args[0].endswith("/page/summary/Ada%20Lovelace")

async def test_wikipedia_not_found():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(404, {"title": "Not found."})
        assert await WikipediaAdapter().summary("Qwxzy") is None

async def test_wikipedia_server_error():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(500, {})
        with pytest.raises(CapabilityError):
            await WikipediaAdapter().summary("Ada Lovelace")


async def test_wikipedia_non_object_payload():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, ["not", "an", "object"])
        with pytest.raises(CapabilityError):
            await WikipediaAdapter().summary("Ada Lovelace")

async def test_knowledge_skill_survives_non_object_payload():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, ["not", "an", "object"])
        result = await KnowledgeSkill(WikipediaAdapter()).resolve(Query("who is Ada Lovelace"))
    assert result.text == knowledge.NOT_FOUND

@pytest.mark.parametrize("payload, expected", [
    ({"AbstractText": "An abstract.", "Answer": "an answer"}, "An abstract."),
    ({"AbstractText": "", "Answer": "42"}, "42"),
    ({"AbstractText": "", "Answer": ""}, ""),
])
async def test_duckduckgo_search(payload, expected):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, payload)
        assert await DuckDuckGoAdapter().search("meaning of life") == expected
    assert mock_get.call_args.kwargs["params"]["q"] == "meaning of life"

async def test_duckduckgo_non_object_payload():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, ["x"])
        with pytest.raises(CapabilityError):
            await DuckDuckGoAdapter().search("anything")

async def test_duckduckgo_unavailable():
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(CapabilityError):
            await DuckDuckGoAdapter().search("anything")


async def test_llm_complete_success():
    body = {"choices": [{"message": {"content": "  Hello there.  "}}]}
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, body, method="POST")
        client = ChatCompletionsClient(api_key="sk-test", base_url="https://llm.example/v1/")
        text = await client.complete("system", "hi", max_tokens=50, temperature=0.2)

    assert text == "Hello there."
    url = mock_post.call_args.args[0]
    assert url == "https://llm.example/v1/chat/completions"
    sent = mock_post.call_args.kwargs["json"]
    assert sent["messages"][0] == {"role": "system", "content": "system"}
    assert sent["messages"][1] == {"role": "user", "content": "hi"}
    assert sent["max_tokens"] == 50
    assert sent["temperature"] == 0.2
    assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer sk-test"

async def test_llm_missing_key_is_auth_error():
    client = ChatCompletionsClient(api_key=None)
    assert not client.configured
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        with pytest.raises(LanguageModelAuthError):
            await client.complete("s", "u", 10, 0.1)
        assert not mock_post.called

async def test_llm_401_is_auth_error():
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(401, {"error": "bad key"}, method="POST")
        with pytest.raises(LanguageModelAuthError):
            await ChatCompletionsClient(api_key="bad").complete("s", "u", 10, 0.1)

async def test_llm_server_error_is_generic():
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(500, {}, method="POST")
        with pytest.raises(LanguageModelError) as excinfo:
            await ChatCompletionsClient(api_key="k").complete("s", "u", 10, 0.1)
    assert not isinstance(excinfo.value, LanguageModelAuthError)

async def test_llm_no_choices():
    with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _response(200, {"choices": []}, method="POST")
        with pytest.raises(LanguageModelError):
            await ChatCompletionsClient(api_key="k").complete("s", "u", 10, 0.1)
