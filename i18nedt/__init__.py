# i18nedt/__init__.py
"""
i18nedt - 通过外部编辑器批量编辑多语言 JSON 文件。
"""

__version__ = "0.1.0"

__all__ = ['__version__']
