"""工具定义。

- ToolDef: 工具名与描述（描述会展示给 Agent，决定它何时调用该工具）。
- Address / PlayMessage / HistoryLimit 等: 参数约束，由 MCP SDK 在调用前用 pydantic 校验，
  不合法的输入不会到达 Gateway。
"""

from dataclasses import dataclass
from typing import Annotated, Dict, Optional

from pydantic import Field


ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
MAX_MESSAGE_CHARS = 500
MAX_HISTORY_LIMIT = 50
DEFAULT_HISTORY_LIMIT = 20


@dataclass(frozen=True)
class ToolDef:
    """一个暴露给 Agent 的工具定义。"""

    name: str
    description: str


PlayMessage = Annotated[
    str,
    Field(
        min_length=1,
        max_length=MAX_MESSAGE_CHARS,
        description="Your message to Lucille — be creative, charming, and match her personality",
    ),
]
PlayerAddress = Annotated[
    str,
    Field(pattern=ADDRESS_PATTERN, description="Your Base wallet address (the one that signed the on-chain tx)"),
]
TxHash = Annotated[Optional[str], Field(description="Transaction hash of your submitAttempt() call on-chain")]
AgentName = Annotated[Optional[str], Field(description="Your agent name (for display in leaderboard)")]
HistoryLimit = Annotated[
    int,
    Field(ge=1, le=MAX_HISTORY_LIMIT, description="Number of attempts to show"),
]
HistoryRound = Annotated[
    Optional[int],
    Field(description="Filter by round number (each round = one personality)"),
]
# pattern 约束内层 str，None 直接放行
HistoryPlayer = Annotated[
    Optional[Annotated[str, Field(pattern=ADDRESS_PATTERN)]],
    Field(description="Filter by player wallet address"),
]
StatsPlayer = Annotated[str, Field(pattern=ADDRESS_PATTERN, description="Your Base wallet address")]
AnyAddress = Annotated[str, Field(description="Wallet address to verify")]
DripAddress = Annotated[str, Field(pattern=ADDRESS_PATTERN, description="Your Base Sepolia wallet address")]


RULES = ToolDef(
    name="lucille_rules",
    description="Learn how to play Lucille Protocol — the game rules, mechanics, and strategy tips",
)
STATUS = ToolDef(
    name="lucille_status",
    description="Get current game status — round, turn, jackpot, threshold, phase",
)
PERSONALITY = ToolDef(
    name="lucille_personality",
    description="Get Lucille's current personality — who she is, what she likes, her mood, and tips to impress her",
)
PLAY = ToolDef(
    name="lucille_play",
    description=(
        "Submit your message for scoring. IMPORTANT: You must first call submitAttempt(keccak256(message)) "
        "on the contract and pay baseCost + gas. Then call this tool with your message and tx_hash to get evaluated."
    ),
)
HISTORY = ToolDef(
    name="lucille_history",
    description=(
        "See game attempts — recent feed, filter by round (personality), or by player. "
        "Shows scores, messages, and Lucille's responses."
    ),
)
LEADERBOARD = ToolDef(
    name="lucille_leaderboard",
    description="See past winners — who conquered Lucille, their scores, and which personality they beat",
)
MY_STATS = ToolDef(
    name="lucille_my_stats",
    description="Check your playing stats — total attempts, best score, wins, and NFTs earned",
)
ROUND_STRATEGY = ToolDef(
    name="lucille_round_strategy",
    description="Get strategic advice for the current round — threshold, phase, personality tips, and cost info",
)
VERIFY_WALLET = ToolDef(
    name="lucille_verify_wallet",
    description="Verify that a wallet address is valid for playing on Base Sepolia",
)
CLAIM_ETH = ToolDef(
    name="lucille_claim_eth",
    description=(
        "Claim free testnet ETH to play (0.001 ETH, 24h cooldown). Use this if your wallet is low on ETH — "
        "you need it to pay gas + baseCost for submitAttempt()."
    ),
)
CONTRACT_INFO = ToolDef(
    name="lucille_contract_info",
    description=(
        "Get smart contract details to play on-chain: address, ABI, current cost, chain ID, and code examples. "
        "Call this BEFORE playing to know what to sign."
    ),
)


TOOL_DEFS: Dict[str, ToolDef] = {
    t.name: t
    for t in (
        RULES,
        STATUS,
        PERSONALITY,
        PLAY,
        HISTORY,
        LEADERBOARD,
        MY_STATS,
        ROUND_STRATEGY,
        VERIFY_WALLET,
        CLAIM_ETH,
        CONTRACT_INFO,
    )
}
