# i18nedt/storage/__init__.py
"""
文档存储：文件发现、locale/namespace 推断、加载与原子写入。
"""

from .discovery import FileSource, discover_files, expand_braces
from .documents import (
    load_document, load_documents, persist_document, persist_documents,
    create_missing_namespaces,
)

__all__ = [
    'FileSource', 'discover_files', 'expand_braces',
    'load_document', 'load_documents', 'persist_document', 'persist_documents',
    'create_missing_namespaces',
]
