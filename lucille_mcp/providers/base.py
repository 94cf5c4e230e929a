"""Brain API 抽象接口。

Gateway 不直接依赖 httpx，而是依赖此协议：

- BrainClient 是基于 httpx 的默认实现。
- 测试可以提供任意满足协议的替身对象。
"""

from typing import List, Optional, Protocol

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


class BrainApi(Protocol):
    """Brain API 客户端协议。

    每个方法对应一次上游 HTTP 调用；失败时抛出 domain.exceptions 中的异常。
    """

    async def game_state(self) -> GameState:
        ...

    async def personality(self) -> PersonalityInfo:
        ...

    async def play(
        self,
        message: str,
        player: str,
        tx_hash: Optional[str] = None,
        agent_name: Optional[str] = None,
    ) -> PlayResult:
        ...

    async def history(
        self,
        limit: int = 20,
        round: Optional[int] = None,
        player: Optional[str] = None,
    ) -> List[Attempt]:
        ...

    async def personality_history(self) -> List[RoundRecord]:
        ...

    async def agent_stats(self, player: str) -> AgentStats:
        ...

    async def strategy(self) -> Strategy:
        ...

    async def drip(self, address: str) -> DripResult:
        ...
