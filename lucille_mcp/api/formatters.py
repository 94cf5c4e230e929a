"""工具结果格式化。

这里全部是纯函数：输入为 domain.models 中的响应模型或 ClassifiedError，
输出为返回给 Agent 的文本，不做任何网络调用，便于单独测试。
"""

import json
import re
from typing import Any, Dict, List, Optional

from lucille_mcp.domain.models import (
    AgentStats,
    Attempt,
    ClassifiedError,
    DripResult,
    ErrorKind,
    GameState,
    PersonalityInfo,
    PlayResult,
    RoundRecord,
    Strategy,
)
from lucille_mcp.config.settings import DEFAULT_API_URL
from lucille_mcp.providers.registry import DEFAULT_CONTRACT, ContractConfig


ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")
MAX_SNIPPET_CHARS = 200
RATE_LIMIT_NOTE = "Limit: 3 plays/min per wallet, 60 reads/min."
MISSING = "?"


def is_valid_address(address: str) -> bool:
    return ADDRESS_RE.fullmatch(address) is not None


def _v(value: Any) -> str:
    """上游字段转展示文本：缺失为 "?"，整数值的浮点数去掉 ".0"。"""

    if value is None:
        return MISSING
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dumps(payload: Dict[str, Any]) -> str:
    return json.dumps({k: v for k, v in payload.items() if v is not None}, indent=2, ensure_ascii=False)


def short_address(address: Optional[str]) -> str:
    """0x1234567890...5678 -> 0x1234...5678"""

    if not address:
        return "???"
    return f"{address[:6]}...{address[-4:]}"


# ---- 成功结果 ----

def format_status(state: GameState, contract: ContractConfig = DEFAULT_CONTRACT) -> str:
    p = state.personality
    return _dumps({
        "round": state.round,
        "turn": state.turn,
        "jackpot": f"{_v(state.jackpot)} ETH" if state.jackpot is not None else None,
        "threshold": f"{_v(state.threshold)}%" if state.threshold is not None else None,
        "phase": state.phase,
        "personality": p.name if p else None,
        "personality_emoji": p.emoji if p else None,
        "network": contract.network,
    })


def format_personality(info: PersonalityInfo) -> str:
    return _dumps({
        "name": info.name,
        "emoji": info.emoji,
        "mood": info.mood,
        "description": info.description,
        "tip": info.tip,
        "likes": info.likes,
        "hates": info.hates,
        "visual_prompt": info.visual_prompt,
    })


def format_play(result: PlayResult, player: str) -> str:
    lines = [
        f"Score: {_v(result.score)}/{_v(result.threshold)} (need {_v(result.threshold)}% to win)",
        f"Won: {'🎉 YES!' if result.won else '❌ No'}",
        f'Lucille says: "{result.response or ""}"',
        f"Personality: {_v(result.personality)} {result.personality_emoji or ''}".rstrip(),
        f"Round {_v(result.round)}, Turn {_v(result.turn)} ({_v(result.phase)})",
        f"Jackpot: {_v(result.jackpot)} ETH",
    ]
    if result.won:
        prize = result.prize_eth if result.prize_eth else result.jackpot
        lines.append("")
        lines.append("🏆 VICTORY!")
        lines.append(f"Prize: {_v(prize)} ETH → sent to {player}")
        if result.nft_token_id is not None:
            lines.append(f"NFT: Token #{result.nft_token_id}")
        if result.nft_opensea_url:
            lines.append(f"OpenSea: {result.nft_opensea_url}")
        if result.message_to_agent:
            lines.append(result.message_to_agent)
    return "\n".join(lines)


def group_attempts(attempts: List[Attempt]) -> Dict[str, List[Attempt]]:
    """按 "人格 (Round N)" 分组，保持首次出现的顺序。"""

    grouped: Dict[str, List[Attempt]] = {}
    for a in attempts:
        key = f"{a.personality or 'Unknown'} (Round {a.round or '?'})"
        grouped.setdefault(key, []).append(a)
    return grouped


def format_history(
    attempts: List[Attempt],
    round: Optional[int] = None,
    player: Optional[str] = None,
) -> str:
    if not attempts:
        return "No attempts found for the given filters."

    if round:
        out = [f"=== Attempts for Round {round} ===", ""]
    elif player:
        out = [f"=== Attempts by {player[:10]}... ===", ""]
    else:
        out = [f"=== Recent {len(attempts)} Attempts ===", ""]

    for group, items in group_attempts(attempts).items():
        out.append(f"--- {group} ---")
        for i, a in enumerate(items, start=1):
            badge = "🏆 WIN" if a.won else f"Score: {_v(a.score)}"
            source = " 🤖" if a.source == "agent" else ""
            out.append(f"{i}. [{badge}] {short_address(a.player)}{source}")
            out.append(f'   Message: "{(a.message or "")[:MAX_SNIPPET_CHARS]}"')
            out.append(f'   Lucille: "{(a.response or "")[:MAX_SNIPPET_CHARS]}"')
            out.append("")
    return "\n".join(out).strip()


def format_leaderboard(records: List[RoundRecord]) -> str:
    lines = []
    for i, h in enumerate(records, start=1):
        if h.victory:
            v = h.victory
            winner = (
                f"🏆 Won by {(v.winner or '')[:10]} "
                f"(score: {_v(v.score)}, jackpot: {_v(v.jackpot)} ETH)"
            )
        else:
            winner = "No winner yet"
        lines.append(f'Round {h.round or i}: "{_v(h.name)}" {h.emoji or ""} — {winner}')
    return "Past rounds:\n" + "\n".join(lines)


def format_my_stats(stats: AgentStats, player: str) -> str:
    lines = [
        f"Player: {player}",
        f"Total attempts: {_v(stats.total_attempts)}",
        f"Total wins: {_v(stats.total_wins)}",
        f"Best score: {_v(stats.best_score)}",
        f"Average score: {_v(stats.average_score)}",
    ]
    if stats.nfts:
        lines.append("")
        lines.append("NFTs earned:")
        for nft in stats.nfts:
            line = f"  - Round {_v(nft.round)}: Score {_v(nft.score)} ({_v(nft.personality)})"
            if nft.opensea_url:
                line += f" — {nft.opensea_url}"
            lines.append(line)
    if stats.recent_attempts:
        lines.append("")
        lines.append("Recent attempts:")
        for a in stats.recent_attempts:
            mark = "🏆" if a.won else "❌"
            lines.append(
                f'  - {mark} Score: {_v(a.score)} — "{a.message_preview or ""}..." ({_v(a.personality)})'
            )
    return "\n".join(lines) + "\n"


def format_strategy(strategy: Strategy) -> str:
    p = strategy.personality or PersonalityInfo()
    lines = [
        f"=== Strategy for Round {_v(strategy.round)} ===",
        "",
        f"Turn: {_v(strategy.turn)} | Phase: {_v(strategy.phase)} | Threshold: {_v(strategy.threshold)}%",
        f"Jackpot: {_v(strategy.jackpot)} ETH",
        "",
        f'Personality: "{_v(p.name)}" ({_v(p.mood)})',
    ]
    if strategy.advice:
        lines.append("")
        lines.append("Advice:")
        lines.extend(f"  💡 {tip}" for tip in strategy.advice)
    cost = strategy.cost_info
    lines.append("")
    lines.append(
        f"Cost: {_v(cost.cost_per_play if cost else None)} ({_v(cost.network if cost else None)})"
    )
    return "\n".join(lines) + "\n"


def format_verify_wallet(address: str) -> str:
    if not is_valid_address(address):
        return (
            f'❌ Invalid wallet address: "{address}"\n'
            "Must be a 42-character hex address starting with 0x (e.g. 0x1234...abcd)"
        )
    return (
        f"✅ Valid Base wallet address: {address}\n"
        "You can use this address to play. If you win, ETH and NFTs will be sent here.\n"
        "Network: Base Sepolia (testnet)\n"
        "Need testnet ETH? Use lucille_claim_eth to get some."
    )


def format_claim(drip: DripResult, address: str) -> str:
    if drip.status == "has_balance":
        return (
            f"✅ You already have enough ETH ({_v(drip.balance)} ETH). No drip needed.\n"
            "You're ready to play — use lucille_contract_info to get the contract details."
        )
    if drip.status == "cooldown":
        return f"⏳ Cooldown active. {drip.message or 'Please wait'}. You can claim again later."
    if drip.status == "claimed":
        return (
            f"✅ Sent {_v(drip.amount)} ETH to {address}\n"
            f"TX: {_v(drip.tx_hash)}\n"
            "You're ready to play! Use lucille_contract_info to get contract details, "
            "then sign submitAttempt() on-chain."
        )
    return f"Result: {json.dumps(drip.raw, ensure_ascii=False, separators=(',', ':'))}"


def current_cost(state: GameState) -> Any:
    """currentCost 优先，其次 baseCost；都缺失时返回 None（不猜测默认值）。"""

    if state.current_cost is not None:
        return state.current_cost
    return state.base_cost


def format_contract_info(state: GameState, contract: ContractConfig = DEFAULT_CONTRACT) -> str:
    cost = current_cost(state)
    if cost is None:
        cost_line = "Current cost per attempt: unknown (read getCurrentCost() on-chain)"
    else:
        cost_line = f"Current cost per attempt: {_v(cost)} wei"

    out = [
        "=== Lucille Protocol — Contract Info ===",
        "",
        f"Contract: {contract.address}",
        f"Chain: {contract.chain_name} ({contract.chain_id})",
        f"RPC: {contract.rpc_url}",
        cost_line,
        "",
        "=== How to Play On-Chain ===",
        "",
        '1. Hash your message: keccak256(toBytes("your message"))',
        "2. Call submitAttempt(messageHash) with value = currentCost",
        "3. After tx confirms, call lucille_play with your message + tx_hash",
        "",
        "=== ABI (only what you need) ===",
        "",
        *contract.abi_summary,
        "",
        "=== ABI JSON (for ethers.js / viem) ===",
        "",
        json.dumps(contract.abi, separators=(",", ":")),
        "",
        "=== Example (ethers.js v6) ===",
        "",
        'import { ethers } from "ethers";',
        f'const provider = new ethers.JsonRpcProvider("{contract.rpc_url}");',
        "const wallet = new ethers.Wallet(PRIVATE_KEY, provider);",
        f'const contract = new ethers.Contract("{contract.address}", ABI, wallet);',
        'const messageHash = ethers.keccak256(ethers.toUtf8Bytes("your message"));',
        "const cost = await contract.getCurrentCost();",
        "const tx = await contract.submitAttempt(messageHash, { value: cost });",
        "await tx.wait();",
        "",
        "=== Example (viem) ===",
        "",
        'import { keccak256, toBytes } from "viem";',
        'const messageHash = keccak256(toBytes("your message"));',
        "// Use your wallet client to call submitAttempt(messageHash) with value: currentCost",
    ]
    return "\n".join(out) + "\n"


# ---- 失败结果 ----

def format_error(err: ClassifiedError) -> str:
    if err.kind is ErrorKind.RATE_LIMITED:
        return f"⏳ Rate limited — wait {_v(err.retry_after)} seconds and try again.\n{RATE_LIMIT_NOTE}"
    if err.kind is ErrorKind.BAD_REQUEST:
        hint = err.body or "Check your parameters."
        return (
            f"❌ Bad request: {hint}\n"
            "Double-check wallet address format (0x... 42 chars) and message length (1-500 chars)."
        )
    if err.kind is ErrorKind.UNAVAILABLE:
        return "🔧 Lucille is sleeping (maintenance). Try again in a few minutes."
    if err.kind is ErrorKind.UNKNOWN_HTTP:
        return (
            f"❌ API error ({err.status}): {err.body or 'Unknown error'}\n"
            "If this persists, the game may be temporarily unavailable."
        )
    if err.kind is ErrorKind.UNREACHABLE:
        return (
            "🔌 Cannot reach Lucille API. The server may be down or the URL may be wrong.\n"
            f"Default: {DEFAULT_API_URL}"
        )
    if err.kind is ErrorKind.UNKNOWN_TRANSPORT:
        return f"❌ Error: {err.body}"
    return "❌ An unexpected error occurred. Try again."
