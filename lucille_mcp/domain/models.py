"""Brain API 响应模型与错误分类模型。

每个上游端点对应一个 dataclass，由 ``from_payload`` 从原始 JSON 构造：

- 上游未返回的字段统一为 None（或空列表），格式化层据此决定如何展示。
- 上游返回的不是对象（例如 null 或字符串）时，等价于所有字段缺失。

ClassifiedError 是 Gateway 对失败调用的归类结果，格式化层只依赖它，
不再接触任何异常对象。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


@dataclass
class PersonalityInfo:
    """Lucille 当前人格（/api/personality，或 game-state 中的嵌套对象）。"""

    name: Optional[str] = None
    emoji: Optional[str] = None
    mood: Optional[str] = None
    description: Optional[str] = None
    tip: Optional[str] = None
    likes: Any = None
    hates: Any = None
    visual_prompt: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "PersonalityInfo":
        d = _as_dict(data)
        return cls(
            name=d.get("name"),
            emoji=d.get("emoji"),
            mood=d.get("mood"),
            description=d.get("description"),
            tip=d.get("tip"),
            likes=d.get("likes"),
            hates=d.get("hates"),
            visual_prompt=d.get("visual_prompt"),
        )


@dataclass
class GameState:
    """/api/game-state。cost 字段单位为 wei。"""

    round: Optional[int] = None
    turn: Optional[int] = None
    jackpot: Any = None
    threshold: Any = None
    phase: Optional[str] = None
    personality: Optional[PersonalityInfo] = None
    base_cost: Any = None
    current_cost: Any = None

    @classmethod
    def from_payload(cls, data: Any) -> "GameState":
        d = _as_dict(data)
        personality = d.get("personality")
        return cls(
            round=d.get("round"),
            turn=d.get("turn"),
            jackpot=d.get("jackpot"),
            threshold=d.get("threshold"),
            phase=d.get("phase"),
            personality=PersonalityInfo.from_payload(personality) if isinstance(personality, dict) else None,
            base_cost=d.get("baseCost"),
            current_cost=d.get("currentCost"),
        )


@dataclass
class PlayResult:
    """/api/agent/play 的评分结果。胜利时附带奖金与 NFT 信息。"""

    score: Any = None
    threshold: Any = None
    won: bool = False
    response: Optional[str] = None
    personality: Optional[str] = None
    personality_emoji: Optional[str] = None
    round: Optional[int] = None
    turn: Optional[int] = None
    phase: Optional[str] = None
    jackpot: Any = None
    prize_eth: Any = None
    nft_token_id: Any = None
    nft_opensea_url: Optional[str] = None
    message_to_agent: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "PlayResult":
        d = _as_dict(data)
        return cls(
            score=d.get("score"),
            threshold=d.get("threshold"),
            won=bool(d.get("won")),
            response=d.get("response"),
            personality=d.get("personality"),
            personality_emoji=d.get("personality_emoji"),
            round=d.get("round"),
            turn=d.get("turn"),
            phase=d.get("phase"),
            jackpot=d.get("jackpot"),
            prize_eth=d.get("prize_eth"),
            nft_token_id=d.get("nft_token_id"),
            nft_opensea_url=d.get("nft_opensea_url"),
            message_to_agent=d.get("message_to_agent"),
        )


@dataclass
class Attempt:
    """历史记录中的一次尝试。"""

    personality: Optional[str] = None
    round: Optional[int] = None
    player: Optional[str] = None
    score: Any = None
    won: bool = False
    source: Optional[str] = None
    message: Optional[str] = None
    response: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "Attempt":
        d = _as_dict(data)
        return cls(
            personality=d.get("personality"),
            round=d.get("round"),
            player=d.get("player"),
            score=d.get("score"),
            won=bool(d.get("won")),
            source=d.get("source"),
            message=d.get("message"),
            response=d.get("response"),
        )

    @classmethod
    def list_from_payload(cls, data: Any) -> List["Attempt"]:
        """/api/history 既可能直接返回数组，也可能包在 {"attempts": [...]} 里。"""

        items = data if isinstance(data, list) else _as_dict(data).get("attempts")
        return [cls.from_payload(a) for a in _as_list(items)]


@dataclass
class Victory:
    winner: Optional[str] = None
    score: Any = None
    jackpot: Any = None

    @classmethod
    def from_payload(cls, data: Any) -> "Victory":
        d = _as_dict(data)
        return cls(winner=d.get("winner"), score=d.get("score"), jackpot=d.get("jackpot"))


@dataclass
class RoundRecord:
    """/api/personality-history 中的一轮。victory 为 None 表示尚无赢家。"""

    round: Optional[int] = None
    name: Optional[str] = None
    emoji: Optional[str] = None
    victory: Optional[Victory] = None

    @classmethod
    def from_payload(cls, data: Any) -> "RoundRecord":
        d = _as_dict(data)
        victory = d.get("victory")
        return cls(
            round=d.get("round"),
            name=d.get("name"),
            emoji=d.get("emoji"),
            victory=Victory.from_payload(victory) if isinstance(victory, dict) else None,
        )

    @classmethod
    def list_from_payload(cls, data: Any) -> List["RoundRecord"]:
        items = data if isinstance(data, list) else _as_dict(data).get("history")
        return [cls.from_payload(h) for h in _as_list(items)]


@dataclass
class NftRecord:
    round: Optional[int] = None
    score: Any = None
    personality: Optional[str] = None
    opensea_url: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "NftRecord":
        d = _as_dict(data)
        return cls(
            round=d.get("round"),
            score=d.get("score"),
            personality=d.get("personality"),
            opensea_url=d.get("opensea_url"),
        )


@dataclass
class RecentAttempt:
    won: bool = False
    score: Any = None
    message_preview: Optional[str] = None
    personality: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "RecentAttempt":
        d = _as_dict(data)
        return cls(
            won=bool(d.get("won")),
            score=d.get("score"),
            message_preview=d.get("message_preview"),
            personality=d.get("personality"),
        )


@dataclass
class AgentStats:
    """/api/agent/stats。"""

    total_attempts: Any = None
    total_wins: Any = None
    best_score: Any = None
    average_score: Any = None
    nfts: List[NftRecord] = field(default_factory=list)
    recent_attempts: List[RecentAttempt] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any) -> "AgentStats":
        d = _as_dict(data)
        return cls(
            total_attempts=d.get("total_attempts"),
            total_wins=d.get("total_wins"),
            best_score=d.get("best_score"),
            average_score=d.get("average_score"),
            nfts=[NftRecord.from_payload(n) for n in _as_list(d.get("nfts"))],
            recent_attempts=[RecentAttempt.from_payload(a) for a in _as_list(d.get("recent_attempts"))],
        )


@dataclass
class CostInfo:
    cost_per_play: Any = None
    network: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "CostInfo":
        d = _as_dict(data)
        return cls(cost_per_play=d.get("cost_per_play"), network=d.get("network"))


@dataclass
class Strategy:
    """/api/agent/strategy。"""

    round: Optional[int] = None
    turn: Optional[int] = None
    phase: Optional[str] = None
    threshold: Any = None
    jackpot: Any = None
    personality: Optional[PersonalityInfo] = None
    advice: List[str] = field(default_factory=list)
    cost_info: Optional[CostInfo] = None

    @classmethod
    def from_payload(cls, data: Any) -> "Strategy":
        d = _as_dict(data)
        personality = d.get("personality")
        cost_info = d.get("cost_info")
        return cls(
            round=d.get("round"),
            turn=d.get("turn"),
            phase=d.get("phase"),
            threshold=d.get("threshold"),
            jackpot=d.get("jackpot"),
            personality=PersonalityInfo.from_payload(personality) if isinstance(personality, dict) else None,
            advice=[str(tip) for tip in _as_list(d.get("advice"))],
            cost_info=CostInfo.from_payload(cost_info) if isinstance(cost_info, dict) else None,
        )


@dataclass
class DripResult:
    """/api/drip。raw 保留原始响应，未知 status 时原样回显。"""

    status: Optional[str] = None
    balance: Any = None
    message: Optional[str] = None
    amount: Any = None
    tx_hash: Optional[str] = None
    raw: Any = None

    @classmethod
    def from_payload(cls, data: Any) -> "DripResult":
        d = _as_dict(data)
        return cls(
            status=d.get("status"),
            balance=d.get("balance"),
            message=d.get("message"),
            amount=d.get("amount"),
            tx_hash=d.get("txHash"),
            raw=data,
        )


class ErrorKind(str, Enum):
    """失败调用的归类（封闭集合）。"""

    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    UNAVAILABLE = "unavailable"
    UNREACHABLE = "unreachable"
    UNKNOWN_HTTP = "unknown_http"
    UNKNOWN_TRANSPORT = "unknown_transport"
    UNKNOWN = "unknown"


@dataclass
class ClassifiedError:
    """归类后的失败。

    - retry_after: 仅 RATE_LIMITED 使用，单位秒。
    - status: 上游 HTTP 状态码，非 HTTP 失败时为 None。
    - body: 原始响应体或异常信息，用于回显诊断。
    """

    kind: ErrorKind
    retry_after: Optional[int] = None
    status: Optional[int] = None
    body: str = ""
