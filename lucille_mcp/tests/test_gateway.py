import json
from dataclasses import replace

import httpx
import pytest

from lucille_mcp.api.service import Gateway
from lucille_mcp.domain.models import ClassifiedError, ErrorKind
from lucille_mcp.providers.brain_client import BrainClient
from lucille_mcp.providers.registry import BASE_SEPOLIA_CONTRACT


ADDR = "0x1234567890abcdef1234567890abcdef12345678"


class SettingsStub:
    lucille_api_url = "https://brain.test"
    http_timeout = None


def make_gateway(routes):
    """routes: {(method, path): httpx.Response 或返回 Response 的函数}"""

    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        route = routes[(request.method, request.url.path)]
        return route(request) if callable(route) else route

    client = BrainClient(SettingsStub(), transport=httpx.MockTransport(handler))
    return Gateway(client), calls


@pytest.mark.asyncio
async def test_status_end_to_end():
    gw, calls = make_gateway({
        ("GET", "/api/game-state"): httpx.Response(200, json={
            "round": 3, "turn": 5, "jackpot": "0.05", "threshold": 92, "phase": "active",
            "personality": {"name": "Vex", "emoji": "🔥"},
        }),
    })
    text = await gw.status()
    assert '"round": 3' in text
    assert '"threshold": "92%"' in text
    assert '"personality": "Vex"' in text
    assert calls == [("GET", "/api/game-state")]


@pytest.mark.asyncio
async def test_rate_limit_is_formatted_not_raised():
    gw, _ = make_gateway({
        ("POST", "/api/agent/play"): httpx.Response(429, json={"retry_after_seconds": 42}),
    })
    text = await gw.play("hi", ADDR)
    assert text.startswith("⏳ Rate limited — wait 42 seconds")


@pytest.mark.asyncio
async def test_unreachable_is_formatted_not_raised():
    def refuse(request):
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    gw, _ = make_gateway({("GET", "/api/agent/strategy"): refuse})
    text = await gw.round_strategy()
    assert text.startswith("🔌 Cannot reach Lucille API.")


@pytest.mark.asyncio
async def test_unexpected_exception_is_generic():
    class BrokenClient:
        async def personality_history(self):
            raise RuntimeError("bug")

    text = await Gateway(BrokenClient()).leaderboard()
    assert text == "❌ An unexpected error occurred. Try again."


@pytest.mark.asyncio
async def test_call_returns_classified_error():
    gw, _ = make_gateway({("GET", "/api/personality"): httpx.Response(503, text="maintenance")})
    result = await gw.call("lucille_personality", gw._client.personality)
    assert isinstance(result, ClassifiedError)
    assert result.kind is ErrorKind.UNAVAILABLE
    assert result.status == 503


@pytest.mark.asyncio
async def test_history_passes_filters():
    seen = {}

    def history(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[
            {"personality": "A", "round": 1, "score": 10, "player": ADDR, "message": "m", "response": "r"},
        ])

    gw, _ = make_gateway({("GET", "/api/history"): history})
    text = await gw.history(limit=10, player=ADDR)
    assert seen["params"] == {"limit": "10", "player": ADDR}
    assert text.startswith("=== Attempts by 0x12345678... ===")
    assert "1. [Score: 10] 0x1234...5678" in text


@pytest.mark.asyncio
async def test_claim_eth_and_my_stats():
    gw, calls = make_gateway({
        ("POST", "/api/drip"): httpx.Response(200, json={"status": "claimed", "amount": "0.001", "txHash": "0xdef"}),
        ("GET", "/api/agent/stats"): httpx.Response(200, json={"total_attempts": 0}),
    })
    assert (await gw.claim_eth(ADDR)).startswith(f"✅ Sent 0.001 ETH to {ADDR}\nTX: 0xdef")
    assert "Total attempts: 0" in await gw.my_stats(ADDR)
    assert calls == [("POST", "/api/drip"), ("GET", "/api/agent/stats")]


@pytest.mark.asyncio
async def test_contract_info_merges_game_state():
    gw, _ = make_gateway({("GET", "/api/game-state"): httpx.Response(200, json={"currentCost": "123"})})
    text = await gw.contract_info()
    assert "Current cost per attempt: 123 wei" in text
    assert "RPC: https://sepolia.base.org" in text


def test_local_tools_are_pure_and_idempotent():
    gw, calls = make_gateway({})
    assert gw.rules() == gw.rules()
    assert gw.rules().startswith("# Lucille Protocol — Game Rules")
    assert "3. Call lucille_play with a thoughtful, creative message" in gw.rules()
    assert "lucille_contract_info" not in gw.rules()
    assert gw.verify_wallet(ADDR) == gw.verify_wallet(ADDR)
    assert gw.verify_wallet("nope") == gw.verify_wallet("nope")
    assert calls == []


@pytest.mark.asyncio
async def test_client_without_endpoint_still_returns_text():
    class EmptyClient:
        pass

    text = await Gateway(EmptyClient()).claim_eth(ADDR)
    assert text == "❌ An unexpected error occurred. Try again."


@pytest.mark.asyncio
async def test_personality_end_to_end():
    gw, calls = make_gateway({
        ("GET", "/api/personality"): httpx.Response(200, json={
            "name": "Vex", "emoji": "🔥", "likes": ["jazz"], "mood": None,
        }),
    })
    assert json.loads(await gw.personality()) == {"name": "Vex", "emoji": "🔥", "likes": ["jazz"]}
    assert calls == [("GET", "/api/personality")]


@pytest.mark.asyncio
async def test_contract_info_uses_injected_contract():
    other = replace(BASE_SEPOLIA_CONTRACT, address="0x" + "ab" * 20, network="base-mainnet")
    gw = Gateway(BrainClient(SettingsStub(), transport=httpx.MockTransport(
        lambda request: httpx.Response(200, json={"currentCost": "1000"}))), contract=other)
    text = await gw.contract_info()
    assert other.address in text
    assert BASE_SEPOLIA_CONTRACT.address not in text
    assert Gateway(gw._client)._contract is BASE_SEPOLIA_CONTRACT
