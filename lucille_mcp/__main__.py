"""stdio 入口：python -m lucille_mcp 或 lucille-mcp。"""

import sys


def main() -> None:
    # 配置在导入时校验，放在 try 内以便统一报告启动失败
    try:
        from lucille_mcp.server import build_server

        server = build_server()
        print("Lucille MCP Server running on stdio", file=sys.stderr)
        server.run("stdio")
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        print(f"Fatal error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
