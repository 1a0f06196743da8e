# i18nedt/core/codec.py
"""
编辑缓冲区编解码器

serialize: 将多个文档中请求的 key 收集为一个 EditBuffer
render:    将 EditBuffer 渲染为交给外部编辑器的文本
parse:     将编辑后的文本解析为 ChangeSet

文本格式:

    // 提示行（可选）

    # <namespace:key 或 key>
    * <locale>
    <字符串值，可多行>

    + <locale>
    <格式化的 JSON>

    #- <要删除的 key>
"""

import json
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidJSONError, ParseError
from .jsonpath import get_value
from .models import (
    ChangeSet, Document, EditBuffer, TypedValue, ValueKind,
    JSON_MARKER, STRING_MARKER, make_display_key,
)
from .templates import render_template

KEY_PREFIX = "#"
DELETE_PREFIX = "#-"
COMMENT_PREFIX = "//"
STRUCTURE_PREFIXES = (KEY_PREFIX, STRING_MARKER, JSON_MARKER, COMMENT_PREFIX)
TIPS_TEMPLATE = "tips.txt.j2"


# ------------------------------
# serialize
# ------------------------------

def collect_locales(documents: Iterable[Document]) -> List[str]:
    """所有文档中出现过的 locale，排序后返回"""
    return sorted({doc.locale for doc in documents})


def _lookup(doc: Document, key: str) -> Optional[TypedValue]:
    return get_value(doc.data, key)


def _targets(documents: List[Document], requested_key: str) -> List[tuple]:
    """
    计算一个请求 key 对应的 (display_key, document, bare_key) 列表。

    两种请求形式:
    - "ns:key"：只匹配 namespace 完全相同的文档
    - "key"：扇出到实际存在该 key 的每个 namespace；
      如果任何文档中都没有该 key，则扇出到全部 namespace，方便用户新增
    """
    if ":" in requested_key:
        namespace, bare_key = requested_key.split(":", 1)
        return [
            (make_display_key(namespace, bare_key), doc, bare_key)
            for doc in documents if doc.namespace == namespace
        ]

    bare_key = requested_key
    holding = {doc.namespace for doc in documents if _lookup(doc, bare_key) is not None}
    namespaces = holding or {doc.namespace for doc in documents}
    return [
        (make_display_key(doc.namespace, bare_key), doc, bare_key)
        for doc in documents if doc.namespace in namespaces
    ]


def serialize(documents: List[Document], requested_keys: Iterable[str]) -> EditBuffer:
    """
    将请求的 key 从所有文档中收集为 EditBuffer。
    每个 display key 都拥有完整的 locale 行，缺失的值为空字符串。
    """
    buffer = EditBuffer(locales=collect_locales(documents))
    for requested_key in requested_keys:
        for display_key, doc, bare_key in _targets(documents, requested_key):
            row = buffer.row(display_key)
            value = _lookup(doc, bare_key)
            if value is not None:
                row[doc.locale] = value
    return buffer


# ------------------------------
# render
# ------------------------------

def render_tips(buffer: EditBuffer) -> List[str]:
    text = render_template(TIPS_TEMPLATE, locales=buffer.locales)
    return [line for line in text.splitlines() if line.strip()]


def _is_plain_text(raw: str) -> bool:
    """字符串能否原样写入缓冲区并被 parse 读回同样的内容"""
    if raw == "":
        return True
    if raw != "\n".join(raw.splitlines()):
        return False
    for line in raw.split("\n"):
        if not line.strip() or line.startswith(STRUCTURE_PREFIXES):
            return False
    return True


def _entry(value: TypedValue) -> Tuple[str, str]:
    """返回 (marker, payload)。无法原样读回的字符串写成 '+' 的 JSON 字符串字面量"""
    if value.kind is ValueKind.JSON:
        try:
            return JSON_MARKER, json.dumps(json.loads(value.raw), indent=2, ensure_ascii=False)
        except ValueError:
            return JSON_MARKER, value.raw
    if _is_plain_text(value.raw):
        return STRING_MARKER, value.raw
    return JSON_MARKER, json.dumps(value.raw, ensure_ascii=False)


def render(buffer: EditBuffer, tips: bool = True) -> str:
    """渲染编辑缓冲区文本；输出只取决于缓冲区内容"""
    lines: List[str] = []
    if tips:
        lines.extend(render_tips(buffer))
        lines.append("")

    for display_key in buffer.display_keys:
        lines.append(f"{KEY_PREFIX} {display_key}")
        row = buffer.entries[display_key]
        for locale in sorted(row):
            marker, payload = _entry(row[locale])
            lines.append(f"{marker} {locale}")
            if payload:
                lines.append(payload)
            lines.append("")

    for display_key in buffer.deletions:
        lines.append(f"{DELETE_PREFIX} {display_key}")

    return "\n".join(lines) + "\n"


# ------------------------------
# parse
# ------------------------------

class _Parser:
    """逐行状态机：无 key / 有 key 无 locale / key + locale 正在累积值"""

    def __init__(self):
        self.change_set = ChangeSet()
        self.key: Optional[str] = None
        self.locale: Optional[str] = None
        self.kind = ValueKind.STRING
        self.lines: List[str] = []

    def commit(self):
        if self.key is None or self.locale is None:
            return
        raw = "\n".join(self.lines)
        if self.kind is ValueKind.JSON:
            try:
                json.loads(raw)
            except ValueError as e:
                raise InvalidJSONError(
                    f"invalid JSON for key '{self.key}' in locale '{self.locale}': {e}",
                    key=self.key, locale=self.locale,
                ) from e
        self.change_set.updates.setdefault(self.key, {})[self.locale] = TypedValue(self.kind, raw)
        self.locale = None
        self.lines = []

    def feed(self, lineno: int, line: str):
        if not line.strip() or line.startswith(COMMENT_PREFIX):
            return

        if line.startswith(DELETE_PREFIX):
            self.commit()
            target = line[len(DELETE_PREFIX):].strip()
            if not target:
                raise ParseError(lineno, "deletion marker without a key")
            if target not in self.change_set.deletions:
                self.change_set.deletions.append(target)
            self.key = None
            self.locale = None
            return

        if line.startswith(KEY_PREFIX):
            self.commit()
            key = line[len(KEY_PREFIX):].strip()
            if not key:
                raise ParseError(lineno, "key header without a key")
            self.key = key
            self.locale = None
            self.lines = []
            self.change_set.updates.setdefault(key, {})
            return

        if line.startswith(STRING_MARKER) or line.startswith(JSON_MARKER):
            self.commit()
            if self.key is None:
                raise ParseError(lineno, "locale marker outside a key section")
            tokens = line[1:].split()
            if not tokens:
                raise ParseError(lineno, f"locale marker '{line[0]}' without a locale")
            self.locale = tokens[0]
            self.kind = ValueKind.JSON if line[0] == JSON_MARKER else ValueKind.STRING
            self.lines = []
            return

        if self.key is not None and self.locale is not None:
            self.lines.append(line)


def parse(text: str) -> ChangeSet:
    """
    解析编辑后的缓冲区文本。

    Raises:
        ParseError: 结构错误（如 locale 标记后没有 locale）
        InvalidJSONError: '+' 标记的值不是合法 JSON
    """
    parser = _Parser()
    for lineno, line in enumerate(text.splitlines(), start=1):
        parser.feed(lineno, line)
    parser.commit()
    return parser.change_set
