"""对外工具服务模块（Gateway）。

每个公开方法对应一个 MCP 工具：
- 至多发出一次上游 HTTP 请求；
- 成功时把响应模型交给 formatters 转为文本；
- 失败时归类为 ClassifiedError 并返回提示文本，任何异常都不会越过本层。
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from lucille_mcp.api import formatters
from lucille_mcp.api.errors import classify_error
from lucille_mcp.domain.models import ClassifiedError, ErrorKind, GameState
from lucille_mcp.infrastructure.logging.logger import logger
from lucille_mcp.prompts import load_prompt
from lucille_mcp.providers.base import BrainApi
from lucille_mcp.providers.registry import DEFAULT_CONTRACT, ContractConfig


T = TypeVar("T")
Result = Union[T, ClassifiedError]


def render(result: Result, formatter: Callable[[Any], str]) -> str:
    """Result -> 文本：失败走 format_error，成功走对应的 formatter。"""

    if isinstance(result, ClassifiedError):
        return formatters.format_error(result)
    return formatter(result)


class Gateway:
    """Lucille 工具网关。

    Args:
        client: Brain API 客户端（见 providers.create_client）。
        contract: 链上合约元数据，默认 Base Sepolia。
    """

    def __init__(self, client: BrainApi, contract: ContractConfig = DEFAULT_CONTRACT):
        self._client = client
        self._contract = contract

    # ---- 本地工具（无网络） ----

    def rules(self) -> str:
        return load_prompt("rules")

    def verify_wallet(self, address: str) -> str:
        return formatters.format_verify_wallet(address)

    # ---- 上游工具 ----

    async def status(self) -> str:
        return await self._run(
            "lucille_status",
            lambda: self._client.game_state(),
            lambda state: formatters.format_status(state, self._contract),
        )

    async def personality(self) -> str:
        return await self._run("lucille_personality", lambda: self._client.personality(), formatters.format_personality)

    async def play(
        self,
        message: str,
        player: str,
        tx_hash: Optional[str] = None,
        agent_name: Optional[str] = None,
    ) -> str:
        return await self._run(
            "lucille_play",
            lambda: self._client.play(message, player, tx_hash=tx_hash, agent_name=agent_name),
            lambda result: formatters.format_play(result, player),
        )

    async def history(
        self,
        limit: int = 20,
        round: Optional[int] = None,
        player: Optional[str] = None,
    ) -> str:
        return await self._run(
            "lucille_history",
            lambda: self._client.history(limit=limit, round=round, player=player),
            lambda attempts: formatters.format_history(attempts, round=round, player=player),
        )

    async def leaderboard(self) -> str:
        return await self._run(
            "lucille_leaderboard", lambda: self._client.personality_history(), formatters.format_leaderboard
        )

    async def my_stats(self, player: str) -> str:
        return await self._run(
            "lucille_my_stats",
            lambda: self._client.agent_stats(player),
            lambda stats: formatters.format_my_stats(stats, player),
        )

    async def round_strategy(self) -> str:
        return await self._run("lucille_round_strategy", lambda: self._client.strategy(), formatters.format_strategy)

    async def claim_eth(self, address: str) -> str:
        return await self._run(
            "lucille_claim_eth",
            lambda: self._client.drip(address),
            lambda drip: formatters.format_claim(drip, address),
        )

    async def contract_info(self) -> str:
        return await self._run("lucille_contract_info", lambda: self._client.game_state(), self._format_contract_info)

    # ---- 辅助方法 ----

    def _format_contract_info(self, state: GameState) -> str:
        if formatters.current_cost(state) is None:
            logger.warning(
                "game-state returned neither currentCost nor baseCost",
                extra={"extra": {"tool": "lucille_contract_info"}},
            )
        return formatters.format_contract_info(state, self._contract)

    async def call(self, tool: str, fetch: Callable[[], Awaitable[T]]) -> Result:
        """执行一次上游调用，把任何失败转换为 ClassifiedError。"""

        try:
            return await fetch()
        except Exception as exc:
            err = classify_error(exc)
            fields = {"tool": tool, "kind": err.kind.value, "status": err.status}
            if err.kind is ErrorKind.UNKNOWN:
                logger.exception(f"{tool} failed unexpectedly", extra={"extra": fields})
            else:
                logger.warning(f"{tool} failed: {err.kind.value}", extra={"extra": fields})
            return err

    async def _run(self, tool: str, fetch: Callable[[], Awaitable[T]], formatter: Callable[[T], str]) -> str:
        result = await self.call(tool, fetch)
        try:
            return render(result, formatter)
        except Exception as exc:
            logger.exception(f"{tool} formatting failed", extra={"extra": {"tool": tool}})
            return formatters.format_error(classify_error(exc))
