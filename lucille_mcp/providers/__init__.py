"""Brain API 集成层。

该包下的模块负责：
- 定义 Brain API 抽象接口 (base)。
- 维护链上合约的静态配置 (registry)。
- 提供基于 httpx 的具体实现 (brain_client)。
"""

from typing import Optional

import httpx

from lucille_mcp.config.settings import settings
from lucille_mcp.providers.base import BrainApi
from lucille_mcp.providers.brain_client import BrainClient


def create_client(cfg=None, transport: Optional[httpx.AsyncBaseTransport] = None) -> BrainApi:
    """根据配置创建 Brain API 客户端，默认取全局 settings。"""

    return BrainClient(cfg or settings, transport=transport)


__all__ = ["BrainApi", "BrainClient", "create_client"]
