"""MCP 服务注册。

把 Gateway 的十一个方法注册为 FastMCP 工具。参数类型来自 tools.definitions，
由 MCP SDK 负责校验，本模块只做转发。
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from lucille_mcp.api.service import Gateway
from lucille_mcp.config.settings import settings
from lucille_mcp.prompts import load_prompt
from lucille_mcp.providers import create_client
from lucille_mcp.tools import definitions as defs
from lucille_mcp.tools.definitions import (
    AgentName,
    AnyAddress,
    DripAddress,
    HistoryLimit,
    HistoryPlayer,
    HistoryRound,
    PlayerAddress,
    PlayMessage,
    StatsPlayer,
    TxHash,
)


SERVER_NAME = "lucille-protocol"


def build_server(gateway: Optional[Gateway] = None, cfg=None) -> FastMCP:
    """创建 FastMCP 实例并注册全部工具。

    gateway 为空时按 cfg（默认全局 settings）创建 BrainClient。
    """

    gw = gateway or Gateway(create_client(cfg or settings))
    server = FastMCP(SERVER_NAME, instructions=load_prompt("instructions"))

    @server.tool(name=defs.RULES.name, description=defs.RULES.description)
    async def lucille_rules() -> str:
        return gw.rules()

    @server.tool(name=defs.STATUS.name, description=defs.STATUS.description)
    async def lucille_status() -> str:
        return await gw.status()

    @server.tool(name=defs.PERSONALITY.name, description=defs.PERSONALITY.description)
    async def lucille_personality() -> str:
        return await gw.personality()

    @server.tool(name=defs.PLAY.name, description=defs.PLAY.description)
    async def lucille_play(
        message: PlayMessage,
        player: PlayerAddress,
        tx_hash: TxHash = None,
        agent_name: AgentName = None,
    ) -> str:
        return await gw.play(message, player, tx_hash=tx_hash, agent_name=agent_name)

    @server.tool(name=defs.HISTORY.name, description=defs.HISTORY.description)
    async def lucille_history(
        limit: HistoryLimit = defs.DEFAULT_HISTORY_LIMIT,
        round: HistoryRound = None,
        player: HistoryPlayer = None,
    ) -> str:
        return await gw.history(limit=limit, round=round, player=player)

    @server.tool(name=defs.LEADERBOARD.name, description=defs.LEADERBOARD.description)
    async def lucille_leaderboard() -> str:
        return await gw.leaderboard()

    @server.tool(name=defs.MY_STATS.name, description=defs.MY_STATS.description)
    async def lucille_my_stats(player: StatsPlayer) -> str:
        return await gw.my_stats(player)

    @server.tool(name=defs.ROUND_STRATEGY.name, description=defs.ROUND_STRATEGY.description)
    async def lucille_round_strategy() -> str:
        return await gw.round_strategy()

    @server.tool(name=defs.VERIFY_WALLET.name, description=defs.VERIFY_WALLET.description)
    async def lucille_verify_wallet(address: AnyAddress) -> str:
        return gw.verify_wallet(address)

    @server.tool(name=defs.CLAIM_ETH.name, description=defs.CLAIM_ETH.description)
    async def lucille_claim_eth(address: DripAddress) -> str:
        return await gw.claim_eth(address)

    @server.tool(name=defs.CONTRACT_INFO.name, description=defs.CONTRACT_INFO.description)
    async def lucille_contract_info() -> str:
        return await gw.contract_info()

    return server
