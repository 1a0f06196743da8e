# i18nedt/core/doctor.py
"""
doctor：检查同一 namespace 下各 locale 之间缺失或为空的 key。
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .flatten import flatten_json
from .models import Document

EMPTY_STRING = '""'


@dataclass
class CheckResult:
    document: Document
    missing_keys: List[str] = field(default_factory=list)
    empty_keys: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_keys or self.empty_keys)


def check(documents: List[Document]) -> Dict[str, CheckResult]:
    """
    按 namespace 分组，以组内所有 locale 的 key 并集为基准，
    返回 path -> CheckResult。

    Raises:
        InvalidDocumentError: 文档无法解析
    """
    groups: Dict[str, Dict[str, Document]] = {}
    for doc in documents:
        groups.setdefault(doc.namespace, {})[doc.locale] = doc

    results: Dict[str, CheckResult] = {}
    for locale_docs in groups.values():
        flats = {locale: flatten_json(doc.data, doc.namespace) for locale, doc in locale_docs.items()}
        all_keys = sorted({key for flat in flats.values() for key in flat})

        for locale, doc in locale_docs.items():
            flat = flats[locale]
            results[doc.path] = CheckResult(
                document=doc,
                missing_keys=[key for key in all_keys if key not in flat],
                empty_keys=sorted(key for key, value in flat.items() if value == EMPTY_STRING),
            )
    return results


def issue_keys(results: Dict[str, CheckResult]) -> List[str]:
    """所有存在问题的 key（去重并排序），用于 --simple 输出"""
    keys = set()
    for result in results.values():
        keys.update(result.missing_keys)
        keys.update(result.empty_keys)
    return sorted(keys)
