# i18nedt/storage/locale.py
"""
从文件路径推断 locale 和 namespace。

两种互不混用的策略，按命令行参数的形式确定：
- 参数包含 {{language}}/{{locale}} 与 {{ns}}/{{namespace}} 占位符：按模板提取
- 普通路径：namespace 为空，locale 取文件名（或最近的目录名）中的语言标签
"""

import re
from pathlib import PurePath
from typing import Dict, List, Tuple

from ..core.errors import PathResolutionError

# en, zh-CN, zh_Hant_TW, es-419
LOCALE_RE = re.compile(r"^[a-z]{2}(?:[-_][A-Z][a-z]{3})?(?:[-_](?:[A-Za-z]{2}|\d{3}))?$")

PLACEHOLDER_RE = re.compile(r"\{\{(language|locale|namespace|ns)\}\}")
PLACEHOLDER_GROUPS = {
    "language": "locale",
    "locale": "locale",
    "namespace": "namespace",
    "ns": "namespace",
}


def is_locale_tag(text: str) -> bool:
    return bool(LOCALE_RE.match(text))


def parse_locale_from_path(file_path: str) -> str:
    """
    从路径中提取 locale：
    1. 文件名（去掉扩展名），如 zh-CN.json、en.messages.json
    2. 由近到远的目录名，如 locales/zh-CN/common.json
    3. 都不匹配时退回文件名本身
    """
    path = PurePath(file_path)
    name = path.stem
    candidates = [name, name.split(".", 1)[0]]
    candidates.extend(reversed(path.parent.parts))
    for candidate in candidates:
        if is_locale_tag(candidate):
            return candidate
    return name


# ------------------------------
# 模板路径
# ------------------------------

def has_locale_placeholder(pattern: str) -> bool:
    return "{{language}}" in pattern or "{{locale}}" in pattern


def has_namespace_placeholder(pattern: str) -> bool:
    return "{{namespace}}" in pattern or "{{ns}}" in pattern


def is_pattern(arg: str) -> bool:
    return bool(PLACEHOLDER_RE.search(arg))


def pattern_to_glob(pattern: str) -> str:
    """将占位符替换为 *，用于查找文件"""
    return PLACEHOLDER_RE.sub("*", pattern)


def _escape_literal(text: str) -> str:
    return re.escape(text).replace(r"\*", "[^/]*")


def pattern_to_regex(pattern: str) -> "re.Pattern":
    pattern = pattern.replace("\\", "/")
    parts: List[str] = []
    seen = set()
    pos = 0
    for match in PLACEHOLDER_RE.finditer(pattern):
        parts.append(_escape_literal(pattern[pos:match.start()]))
        group = PLACEHOLDER_GROUPS[match.group(1)]
        parts.append(f"(?P={group})" if group in seen else f"(?P<{group}>[^/]+)")
        seen.add(group)
        pos = match.end()
    parts.append(_escape_literal(pattern[pos:]))
    return re.compile("^" + "".join(parts) + "$")


def extract_metadata(path: str, pattern: str) -> Tuple[str, str]:
    """
    按模板从路径中提取 (locale, namespace)。

    Raises:
        PathResolutionError: 路径与模板不匹配
    """
    normalized = str(path).replace("\\", "/")
    match = pattern_to_regex(pattern).match(normalized)
    if match is None:
        raise PathResolutionError(f"path {path} does not match pattern {pattern}", path=str(path))
    groups: Dict[str, str] = match.groupdict()
    return groups.get("locale") or "", groups.get("namespace") or ""


def construct_path(pattern: str, locale: str, namespace: str) -> str:
    """用 locale 和 namespace 填充模板，得到文件路径"""
    values = {"locale": locale, "namespace": namespace}
    return PLACEHOLDER_RE.sub(lambda m: values[PLACEHOLDER_GROUPS[m.group(1)]], pattern)