import json

import httpx
import pytest

from lucille_mcp.domain.exceptions import ApiError, NetworkError, RateLimitError, ResponseDecodeError
from lucille_mcp.providers import create_client
from lucille_mcp.providers.brain_client import BrainClient


class SettingsStub:
    lucille_api_url = "https://brain.test/api/brain/"
    http_timeout = None


def make_client(handler):
    return BrainClient(SettingsStub(), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_game_state_parses_nested_personality():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["method"] = request.method
        return httpx.Response(200, json={
            "round": 3,
            "turn": 5,
            "jackpot": "0.05",
            "threshold": 92,
            "phase": "active",
            "personality": {"name": "Vex", "emoji": "🔥"},
            "currentCost": "1000",
        })

    state = await make_client(handler).game_state()
    assert seen == {"url": "https://brain.test/api/brain/api/game-state", "method": "GET"}
    assert state.round == 3
    assert state.personality.name == "Vex"
    assert state.current_cost == "1000"
    assert state.base_cost is None


@pytest.mark.asyncio
async def test_history_sends_only_given_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"attempts": [{"personality": "A", "round": 1, "won": True}]})

    attempts = await make_client(handler).history(limit=5)
    assert seen["params"] == {"limit": "5"}
    assert attempts[0].won is True

    player = "0x" + "a" * 40
    await make_client(handler).history(limit=5, round=2, player=player)
    assert seen["params"] == {"limit": "5", "round": "2", "player": player}


@pytest.mark.asyncio
async def test_play_omits_unset_optional_fields():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["content_type"] = request.headers.get("content-type")
        return httpx.Response(200, json={"score": 40, "threshold": 90, "won": False})

    player = "0x" + "b" * 40
    result = await make_client(handler).play("hello", player, agent_name="bot")
    assert seen["body"] == {"message": "hello", "player": player, "agent_name": "bot"}
    assert seen["content_type"] == "application/json"
    assert result.score == 40
    assert result.won is False


@pytest.mark.asyncio
async def test_rate_limit_keeps_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text='{"retry_after_seconds": 12}')

    with pytest.raises(RateLimitError) as exc:
        await make_client(handler).strategy()
    assert exc.value.http_status == 429
    assert exc.value.body == '{"retry_after_seconds": 12}'


@pytest.mark.asyncio
async def test_non_2xx_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(ApiError) as exc:
        await make_client(handler).drip("0x" + "c" * 40)
    assert exc.value.http_status == 500
    assert exc.value.body == "boom"


@pytest.mark.asyncio
async def test_connect_error_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    with pytest.raises(NetworkError) as exc:
        await make_client(handler).personality()
    assert exc.value.code == "CONNECT_ERROR"


@pytest.mark.asyncio
async def test_timeout_is_generic_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(NetworkError) as exc:
        await make_client(handler).personality()
    assert exc.value.code == "NETWORK_ERROR"
    assert "timed out" in exc.value.message


@pytest.mark.asyncio
async def test_invalid_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(ResponseDecodeError):
        await make_client(handler).personality_history()


def test_create_client_uses_given_settings():
    client = create_client(SettingsStub())
    assert isinstance(client, BrainClient)
    assert client.base_url == "https://brain.test/api/brain"
