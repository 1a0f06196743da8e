# i18nedt/storage/documents.py
"""
文档集合的加载与持久化。

- 不存在或为空的文件按 {} 加载
- 写盘只针对 dirty 文档，先写临时文件再原子替换
"""

import json
from pathlib import Path
from typing import Iterable, List, Tuple

from ..core.errors import I18nEditError, InvalidDocumentError, PathResolutionError
from ..core.models import Document
from ..utils.console import warning
from .discovery import FileSource
from .locale import (
    construct_path, extract_metadata, has_locale_placeholder,
    has_namespace_placeholder, parse_locale_from_path,
)

EMPTY_DOCUMENT = "{}"


def resolve_metadata(source: FileSource, path_as_locale: bool = False) -> Tuple[str, str]:
    """
    返回 (locale, namespace)。

    Raises:
        PathResolutionError: 路径与模板不匹配，或 locale 含有空白（缓冲区中的 locale 标记只取第一个词）
    """
    if source.pattern:
        locale, namespace = extract_metadata(source.path, source.pattern)
    elif path_as_locale:
        locale, namespace = source.path, ""
    else:
        locale, namespace = parse_locale_from_path(source.path), ""
    if not locale or any(ch.isspace() for ch in locale):
        raise PathResolutionError(
            f"locale '{locale}' of {source.path} cannot be used in the edit buffer "
            "(locales must be a single word without whitespace)",
            path=source.path,
        )
    return locale, namespace


def load_document(source: FileSource, path_as_locale: bool = False) -> Document:
    """
    加载单个文件。

    Raises:
        PathResolutionError: 路径与模板不匹配，或推断出的 locale 不可用
        InvalidDocumentError: 文件内容不是合法 JSON
    """
    locale, namespace = resolve_metadata(source, path_as_locale)
    doc = Document(path=source.path, locale=locale, namespace=namespace)

    path = Path(source.path)
    if not path.exists():
        return doc
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise I18nEditError(f"failed to read file {source.path}: {e}") from e

    if not content.strip():
        return doc
    try:
        json.loads(content)
    except ValueError as e:
        raise InvalidDocumentError(f"invalid JSON in file {source.path}: {e}", path=source.path) from e
    doc.data = content
    return doc


def load_documents(sources: Iterable[FileSource], path_as_locale: bool = False) -> List[Document]:
    """加载全部文件；无法推断 locale/namespace 的文件给出警告并跳过"""
    documents: List[Document] = []
    for source in sources:
        try:
            documents.append(load_document(source, path_as_locale))
        except PathResolutionError as e:
            warning(f"Skipping {source.path}: {e}")
    return documents


def format_document(data: str) -> str:
    return json.dumps(json.loads(data), indent=2, ensure_ascii=False) + "\n"


def persist_document(doc: Document):
    """
    原子写入单个文档（临时文件 + rename）。

    Raises:
        InvalidDocumentError: 文档内容不是合法 JSON
    """
    try:
        content = format_document(doc.data)
    except ValueError as e:
        raise InvalidDocumentError(f"invalid JSON data for file {doc.path}: {e}", path=doc.path) from e

    target = Path(doc.path)
    target.parent.mkdir(parents=True, exist_ok=True)
    temp_file = target.with_name(target.name + ".tmp")
    try:
        temp_file.write_text(content, encoding="utf-8")
        temp_file.replace(target)  # 原子替换
    except OSError as e:
        temp_file.unlink(missing_ok=True)
        raise I18nEditError(f"failed to write file {doc.path}: {e}") from e


def persist_documents(documents: Iterable[Document]) -> int:
    """只写入 dirty 文档，返回写入的数量"""
    count = 0
    for doc in documents:
        if doc.dirty:
            persist_document(doc)
            count += 1
    return count


def create_missing_namespaces(
    documents: List[Document],
    sources: Iterable[FileSource],
    keys: Iterable[str],
) -> List[str]:
    """
    为请求中显式指定、但尚无文件的 namespace 创建空文档（每个已知 locale 一个）。
    新文档直接追加到 documents 中，返回新建的 namespace 列表。

    Raises:
        I18nEditError: 没有同时包含 {{language}} 和 {{ns}} 的模板，或没有已知 locale
    """
    existing = {doc.namespace for doc in documents}
    missing: List[str] = []
    for key in keys:
        if ":" not in key:
            continue
        namespace = key.split(":", 1)[0]
        if namespace and namespace not in existing and namespace not in missing:
            missing.append(namespace)
    if not missing:
        return []

    template = next(
        (s.pattern for s in sources
         if has_namespace_placeholder(s.pattern) and has_locale_placeholder(s.pattern)),
        "",
    )
    if not template:
        raise I18nEditError(
            "cannot create new namespaces because no pattern with {{ns}} and {{language}} placeholders was found"
        )

    locales = sorted({doc.locale for doc in documents})
    if not locales:
        raise I18nEditError("cannot create new namespaces because no existing locales found")

    for namespace in missing:
        for locale in locales:
            documents.append(Document(
                path=construct_path(template, locale, namespace),
                data=EMPTY_DOCUMENT,
                locale=locale,
                namespace=namespace,
            ))
    return missing
