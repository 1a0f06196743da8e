# i18nedt/core/applier.py
"""
变更应用：将解析得到的 ChangeSet 合并进内存中的文档集合。

先处理删除，再处理更新：同一个 key 可以在一次编辑中被删除后重新写入。
只修改 data 和 dirty，不负责写盘。
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import InvalidDocumentError, InvalidJSONError
from .jsonpath import delete_value, get_value, set_value
from .models import ChangeSet, Document, split_composite_key


@dataclass
class ApplyReport:
    """一次应用的结果汇总，供 CLI 输出"""
    updated: List[Tuple[str, str, str]] = field(default_factory=list)   # (path, key, locale)
    deleted: List[Tuple[str, str]] = field(default_factory=list)        # (path, key)
    skipped: List[Tuple[str, str, str]] = field(default_factory=list)   # (path, key, reason)

    @property
    def changed(self) -> bool:
        return bool(self.updated or self.deleted)


def _matching(documents: List[Document], namespace: str) -> List[Document]:
    return [doc for doc in documents if doc.namespace == namespace]


def apply_deletions(documents: List[Document], deletions: List[str], report: ApplyReport):
    for composite_key in deletions:
        namespace, key = split_composite_key(composite_key)
        for doc in _matching(documents, namespace):
            try:
                new_data = delete_value(doc.data, key)
            except InvalidDocumentError as e:
                report.skipped.append((doc.path, key, str(e)))
                continue
            if doc.replace_data(new_data):
                report.deleted.append((doc.path, key))


def apply_updates(documents: List[Document], change_set: ChangeSet, report: ApplyReport):
    for composite_key, locale_map in change_set.updates.items():
        if not locale_map:
            continue
        namespace, key = split_composite_key(composite_key)
        for doc in _matching(documents, namespace):
            value = locale_map.get(doc.locale)
            if value is None:
                continue
            try:
                current = get_value(doc.data, key)
                if value.same_as(current):
                    continue
                # 缓冲区中的空行只是为了展示缺口，不写入空字符串
                if current is None and not value.is_json and value.raw == "":
                    continue
                new_data = set_value(doc.data, key, value)
            except InvalidJSONError as e:
                raise InvalidJSONError(
                    f"invalid JSON for key '{composite_key}' in locale '{doc.locale}': {e}",
                    key=composite_key, locale=doc.locale,
                ) from e
            except InvalidDocumentError as e:
                report.skipped.append((doc.path, key, str(e)))
                continue
            if doc.replace_data(new_data):
                report.updated.append((doc.path, key, doc.locale))


def apply_changes(documents: List[Document], change_set: ChangeSet) -> ApplyReport:
    """
    将 ChangeSet 应用到文档集合（原地修改）。

    Raises:
        InvalidJSONError: JSON 类型的值无法解析（应在 parse 阶段已被拦截）
    """
    report = ApplyReport()
    apply_deletions(documents, change_set.deletions, report)
    apply_updates(documents, change_set, report)
    return report
