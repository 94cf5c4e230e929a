"""链上合约配置。

Brain API 只负责评分，真正的出价（submitAttempt）由 Agent 自己在链上完成。
这里集中保存 Agent 需要的静态合约元数据：地址、链、RPC 以及最小 ABI 片段。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ContractConfig:
    """某条链上 Lucille 合约的配置。"""

    address: str
    chain_name: str
    chain_id: int
    rpc_url: str
    network: str
    # 人类可读的函数签名，逐行展示
    abi_summary: List[str] = field(default_factory=list)
    # ethers.js / viem 可直接使用的 ABI JSON 片段
    abi: List[Dict[str, Any]] = field(default_factory=list)


BASE_SEPOLIA_CONTRACT = ContractConfig(
    address="0xbBaBb6ced6A179A79D34Dbc4918028a9CaFbD8F8",
    chain_name="Base Sepolia",
    chain_id=84532,
    rpc_url="https://sepolia.base.org",
    network="base-sepolia",
    abi_summary=[
        "submitAttempt(bytes32 _messageHash) payable → returns uint256 turn",
        "getRoundState() view → returns (uint256 roundId, uint256 currentTurn, uint256 pendingAttempts, "
        "uint256 jackpot, uint256 currentCost, bool active)",
        "getCurrentCost() view → returns uint256",
        "getPlayerStats(address) view → returns (uint256 attemptCount, uint256 wins)",
    ],
    abi=[
        {
            "name": "submitAttempt",
            "type": "function",
            "stateMutability": "payable",
            "inputs": [{"name": "_messageHash", "type": "bytes32"}],
            "outputs": [{"name": "turn", "type": "uint256"}],
        },
        {
            "name": "getRoundState",
            "type": "function",
            "stateMutability": "view",
            "inputs": [],
            "outputs": [
                {"name": "_roundId", "type": "uint256"},
                {"name": "_currentTurn", "type": "uint256"},
                {"name": "_pendingAttempts", "type": "uint256"},
                {"name": "_jackpot", "type": "uint256"},
                {"name": "_currentCost", "type": "uint256"},
                {"name": "_active", "type": "bool"},
            ],
        },
        {
            "name": "getCurrentCost",
            "type": "function",
            "stateMutability": "view",
            "inputs": [],
            "outputs": [{"name": "", "type": "uint256"}],
        },
    ],
)


DEFAULT_CONTRACT = BASE_SEPOLIA_CONTRACT
