# i18nedt/core/models.py
"""
i18nedt 核心数据模型
定义了在加载、编辑缓冲区编解码和变更应用之间传递的数据结构。
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ValueKind(Enum):
    STRING = "string"
    JSON = "json"


# 编辑缓冲区中的行首标记
STRING_MARKER = "*"
JSON_MARKER = "+"


@dataclass(frozen=True)
class TypedValue:
    """编辑缓冲区中携带的值：纯字符串或原始 JSON 片段"""
    kind: ValueKind
    raw: str = ""

    @classmethod
    def string(cls, raw: str = "") -> 'TypedValue':
        return cls(ValueKind.STRING, raw)

    @classmethod
    def json(cls, raw: str) -> 'TypedValue':
        return cls(ValueKind.JSON, raw)

    @property
    def is_json(self) -> bool:
        return self.kind is ValueKind.JSON

    @property
    def marker(self) -> str:
        return JSON_MARKER if self.is_json else STRING_MARKER

    def same_as(self, other: Optional['TypedValue']) -> bool:
        """
        判断两个值是否等价。
        字符串比较原文；JSON 比较紧凑序列化后的结构，忽略空白差异。
        """
        if other is None or other.kind is not self.kind:
            return False
        if self.raw == other.raw:
            return True
        if not self.is_json:
            return False
        try:
            return _canonical(self.raw) == _canonical(other.raw)
        except ValueError:
            return False


def _canonical(raw: str) -> str:
    return json.dumps(json.loads(raw), ensure_ascii=False, separators=(",", ":"))


@dataclass
class Document:
    """一个从文件加载的 JSON 文档（每个 locale × namespace 一个）"""
    path: str
    data: str = "{}"
    locale: str = ""
    namespace: str = ""
    dirty: bool = False

    def replace_data(self, new_data: str) -> bool:
        """写入新内容；仅当内容确实变化时标记为 dirty。返回是否发生变化。"""
        if new_data is self.data or new_data == self.data:
            return False
        self.data = new_data
        self.dirty = True
        return True


@dataclass
class EditBuffer:
    """编辑文件在内存中的模型：display key -> locale -> TypedValue"""
    entries: Dict[str, Dict[str, TypedValue]] = field(default_factory=dict)
    locales: List[str] = field(default_factory=list)
    deletions: List[str] = field(default_factory=list)

    @property
    def display_keys(self) -> List[str]:
        return sorted(self.entries)

    def row(self, display_key: str) -> Dict[str, TypedValue]:
        """返回（必要时创建）某个 key 的完整 locale 行，缺失值为空字符串"""
        if display_key not in self.entries:
            self.entries[display_key] = {locale: TypedValue.string() for locale in self.locales}
        return self.entries[display_key]


@dataclass
class ChangeSet:
    """解析编辑后的缓冲区得到的变更集合。允许不完整的行：缺失的 locale 表示“不做处理”。"""
    updates: Dict[str, Dict[str, TypedValue]] = field(default_factory=dict)
    deletions: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.deletions and not any(self.updates.values())


def split_composite_key(composite_key: str) -> tuple:
    """按第一个 ':' 拆分为 (namespace, key)；没有 ':' 时 namespace 为空字符串"""
    if ":" in composite_key:
        namespace, key = composite_key.split(":", 1)
        return namespace, key
    return "", composite_key


def make_display_key(namespace: str, key: str) -> str:
    return f"{namespace}:{key}" if namespace else key
