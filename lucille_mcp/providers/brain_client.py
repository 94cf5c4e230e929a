"""Lucille Brain API 客户端。

本模块负责：

1. 拼接 {LUCILLE_API_URL}{path}，发出一次 GET/POST 请求（JSON，无认证头）。
2. 把网络错误、限流、非 2xx 响应统一转换为 domain.exceptions 中的业务异常。
3. 将响应 JSON 解析为 domain.models 中对应端点的模型。

客户端本身无状态：每次调用新建一个 httpx.AsyncClient，不做缓存、不做重试。
"""

from typing import Any, Dict, List, Optional

import httpx

from lucille_mcp.config.settings import settings
from lucille_mcp.domain.exceptions import NetworkError, ApiError, RateLimitError, ResponseDecodeError
from lucille_mcp.domain.models import (
    AgentStats,
    Attempt,
    DripResult,
    GameState,
    PersonalityInfo,
    PlayResult,
    RoundRecord,
    Strategy,
)
from lucille_mcp.infrastructure.logging.logger import logger


class BrainClient:
    """Brain API 的 httpx 实现。

    - cfg: 提供 lucille_api_url / http_timeout 的配置对象。
    - transport: 可选的 httpx 传输层，测试时注入 httpx.MockTransport。
    """

    def __init__(self, cfg=settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = cfg
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.lucille_api_url.rstrip("/")

    # ---- 端点 ----

    async def game_state(self) -> GameState:
        return GameState.from_payload(await self._get("/api/game-state"))

    async def personality(self) -> PersonalityInfo:
        return PersonalityInfo.from_payload(await self._get("/api/personality"))

    async def play(
        self,
        message: str,
        player: str,
        tx_hash: Optional[str] = None,
        agent_name: Optional[str] = None,
    ) -> PlayResult:
        body: Dict[str, Any] = {"message": message, "player": player}
        if tx_hash is not None:
            body["tx_hash"] = tx_hash
        if agent_name is not None:
            body["agent_name"] = agent_name
        return PlayResult.from_payload(await self._post("/api/agent/play", body))

    async def history(
        self,
        limit: int = 20,
        round: Optional[int] = None,
        player: Optional[str] = None,
    ) -> List[Attempt]:
        params: Dict[str, Any] = {"limit": limit}
        # round 0 与未传等价
        if round:
            params["round"] = round
        if player:
            params["player"] = player
        return Attempt.list_from_payload(await self._get("/api/history", params=params))

    async def personality_history(self) -> List[RoundRecord]:
        return RoundRecord.list_from_payload(await self._get("/api/personality-history"))

    async def agent_stats(self, player: str) -> AgentStats:
        return AgentStats.from_payload(await self._get("/api/agent/stats", params={"player": player}))

    async def strategy(self) -> Strategy:
        return Strategy.from_payload(await self._get("/api/agent/strategy"))

    async def drip(self, address: str) -> DripResult:
        return DripResult.from_payload(await self._post("/api/drip", {"address": address}))

    # ---- 辅助方法 ----

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        return await self._request("POST", path, json_body=body)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}", extra={"extra": {"path": path, "params": params}})
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                resp = await client.request(method, url, params=params, json=json_body)
        except httpx.ConnectError as e:
            # 连接被拒绝 / 无法建立连接
            raise NetworkError(code="CONNECT_ERROR", message=str(e) or "connection failed", path=path)
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, path=path)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message=resp.text, http_status=429, path=path)
        if not resp.is_success:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code, path=path)
        try:
            return resp.json()
        except ValueError as e:
            raise ResponseDecodeError(
                code="INVALID_JSON",
                message=f"Invalid JSON from {path}: {e}",
                http_status=resp.status_code,
                path=path,
            )

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"trust_env": False, "follow_redirects": True}
        timeout = getattr(self._settings, "http_timeout", None)
        if timeout:
            kwargs["timeout"] = timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs
