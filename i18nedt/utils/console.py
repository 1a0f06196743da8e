# i18nedt/utils/console.py
"""
统一的控制台输出工具，基于 rich 实现。
状态信息写到 stderr，stdout 留给 --print 和 flatten 的输出内容。
"""
from typing import Any, Iterable, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# 自定义主题
CUSTOM_THEME = Theme({
    "info": "cyan bold",
    "success": "green bold",
    "warning": "yellow bold",
    "error": "red bold",
    "heading": "bold underline",
    "path": "magenta",
    "key": "blue",
    "locale": "green",
})

# 全局控制台实例（单例），输出到 stderr
console = RichConsole(theme=CUSTOM_THEME, soft_wrap=True, stderr=True, highlight=False)


# --- 便捷输出函数 ---

def info(message: str):
    """蓝色信息提示"""
    console.print(f"[info]INFO[/info]: {escape(message)}")


def success(message: str):
    """绿色成功提示"""
    console.print(f"[success]SUCCESS[/success]: {escape(message)}")


def warning(message: str):
    """黄色警告提示"""
    console.print(f"[warning]WARNING[/warning]: {escape(message)}")


def error(message: str):
    """红色错误提示"""
    console.print(f"[error]ERROR[/error]: {escape(message)}")


def heading(title: str):
    """标题输出"""
    console.print(f"\n[heading]{title}[/heading]\n")


# --- 表格 ---

def print_table(rows: Iterable[Iterable[Any]], headers: Iterable[str], title: Optional[str] = None):
    """打印简单表格"""
    table = Table(title=escape(title) if title else None, show_header=True, header_style="bold magenta")
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*[escape(str(cell)) for cell in row])
    console.print(table)


# --- 交互式输入 ---

def confirm(prompt: str, default: bool = True) -> bool:
    """确认对话（Y/N）"""
    yes_no = "[Y/n]" if default else "[y/N]"
    response = console.input(f"{escape(prompt)} {escape(yes_no)}: ").strip().lower()

    if not response:
        return default
    return response in ("y", "yes")
