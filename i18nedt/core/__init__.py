# i18nedt/core/__init__.py
"""
i18nedt 核心模块：类型化取值、编辑缓冲区编解码、变更应用。
"""

from .models import Document, TypedValue, ValueKind, EditBuffer, ChangeSet
from .errors import (
    I18nEditError, InvalidDocumentError, InvalidJSONError,
    ParseError, EditorFailure, PathResolutionError, ConfigError,
)
from .codec import serialize, render, parse
from .applier import apply_changes

__all__ = [
    'Document', 'TypedValue', 'ValueKind', 'EditBuffer', 'ChangeSet',
    'I18nEditError', 'InvalidDocumentError', 'InvalidJSONError',
    'ParseError', 'EditorFailure', 'PathResolutionError', 'ConfigError',
    'serialize', 'render', 'parse', 'apply_changes',
]
