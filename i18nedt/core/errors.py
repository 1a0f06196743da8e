# i18nedt/core/errors.py
"""Exceptions raised by the i18nedt core."""

from typing import Optional


class I18nEditError(Exception):
    """Base class for all i18nedt errors."""


class InvalidDocumentError(I18nEditError):
    """Raised when a document's content is not valid JSON."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidJSONError(I18nEditError):
    """Raised when a JSON-typed value does not parse."""

    def __init__(self, message: str, *, key: Optional[str] = None, locale: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.locale = locale


class ParseError(I18nEditError):
    """Raised when the edit buffer is structurally malformed."""

    def __init__(self, line: int, reason: str):
        super().__init__(f"line {line}: {reason}")
        self.line = line
        self.reason = reason


class EditorFailure(I18nEditError):
    """Raised when the external editor is missing or exits non-zero."""

    def __init__(self, message: str, *, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class PathResolutionError(I18nEditError):
    """Raised when locale/namespace cannot be inferred from a file path."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigError(I18nEditError):
    """Raised when the configuration file cannot be read or is invalid."""
