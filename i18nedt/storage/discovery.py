# i18nedt/storage/discovery.py
"""
文件发现：花括号展开、glob 匹配和占位符模板。
"""

import glob
import re
from dataclasses import dataclass
from typing import List

from ..core.errors import I18nEditError
from ..utils.console import warning
from .locale import is_pattern, pattern_to_glob

GLOB_CHARS = ("*", "?", "[")
BRACE_RE = re.compile(r"\{([^{}]*,[^{}]*)\}")
ENV_SEPARATORS = re.compile(r"[\s:;]+")


@dataclass
class FileSource:
    """待加载的文件，以及用于提取 locale/namespace 的模板（如果有）"""
    path: str
    pattern: str = ""


def expand_braces(pattern: str) -> List[str]:
    """
    展开花括号，如 src/{en,zh-CN}.json -> [src/en.json, src/zh-CN.json]。
    支持嵌套，从最内层开始展开。
    """
    match = BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        for item in expand_braces(head + option + tail):
            if item not in expanded:
                expanded.append(item)
    return expanded


def split_env_files(value: str) -> List[str]:
    """拆分 I18NEDT_FILES 环境变量（空白、':' 或 ';' 分隔）"""
    return [part for part in ENV_SEPARATORS.split(value or "") if part]


def has_magic(path: str) -> bool:
    return any(ch in path for ch in GLOB_CHARS)


def discover_files(args: List[str]) -> List[FileSource]:
    """
    将命令行参数解析为待加载的文件列表。

    - 不含通配符的路径直接保留（文件可以尚不存在）
    - 没有匹配结果的通配符会给出警告并跳过
    """
    if not args:
        raise I18nEditError(
            "at least one file must be specified "
            "(use command line arguments or the I18NEDT_FILES environment variable)"
        )

    sources: List[FileSource] = []
    seen = set()
    for arg in args:
        pattern = arg if is_pattern(arg) else ""
        glob_pattern = pattern_to_glob(arg) if pattern else arg
        for candidate in expand_braces(glob_pattern):
            if has_magic(candidate):
                matches = sorted(glob.glob(candidate, recursive=True))
                if not matches:
                    warning(f"No files match pattern: {candidate}")
            else:
                matches = [candidate]
            for match in matches:
                if match not in seen:
                    seen.add(match)
                    sources.append(FileSource(path=match, pattern=pattern))
    return sources
