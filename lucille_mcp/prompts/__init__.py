"""静态提示文本加载工具。

按语言(locale) 从 prompts/<locale> 目录读取 Markdown 文本：
- rules: lucille_rules 工具返回的游戏规则。
- instructions: MCP 初始化时交给宿主的服务说明。
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def load_prompt(name: str, locale: str = "en") -> str:
    """根据名称和语言加载提示文本，去掉末尾换行。"""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return fname.read_text(encoding="utf-8").rstrip("\n")
