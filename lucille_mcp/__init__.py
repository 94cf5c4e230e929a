"""Lucille MCP 顶层包。

该包把 Lucille Protocol 游戏的 Brain API 暴露为 MCP 工具，
包括配置加载、响应模型、HTTP 客户端、错误归类、文本格式化与 stdio 服务入口。
"""

__version__ = "0.1.2"

__all__ = ["__version__"]
