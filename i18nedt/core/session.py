# i18nedt/core/session.py
"""
编辑会话：持有临时文件路径、请求的 key、locale 列表、缓冲区内容和删除列表。
会话是显式传递的值，不依赖任何全局状态。
"""

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..utils.checksum import file_checksum
from .applier import ApplyReport, apply_changes
from .codec import parse, render, serialize
from .editor import run_editor
from .models import ChangeSet, Document, EditBuffer, TypedValue

TEMP_PREFIX = ".i18nedt-"
TEMP_SUFFIX = ".md"


@dataclass
class EditSession:
    path: str
    keys: List[str]
    buffer: EditBuffer
    tips: bool = True
    checksum: str = ""
    modified: bool = False
    change_set: Optional[ChangeSet] = None

    @classmethod
    def create(
        cls,
        documents: List[Document],
        keys: List[str],
        directory: str = ".",
        tips: bool = True,
    ) -> 'EditSession':
        """从文档集合生成缓冲区，并在 directory 下创建以点开头的临时文件"""
        buffer = serialize(documents, keys)
        fd, path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=directory)
        os.close(fd)
        return cls(path=path, keys=list(keys), buffer=buffer, tips=tips)

    @property
    def locales(self) -> List[str]:
        return self.buffer.locales

    @property
    def content(self) -> Dict[str, Dict[str, TypedValue]]:
        return self.buffer.entries

    @property
    def deletions(self) -> List[str]:
        if self.change_set is not None:
            return self.change_set.deletions
        return self.buffer.deletions

    def render(self) -> str:
        return render(self.buffer, tips=self.tips)

    def write(self):
        content = self.render()
        Path(self.path).write_text(content, encoding="utf-8")
        self.checksum = file_checksum(self.path)

    def read(self) -> ChangeSet:
        """
        读取并解析编辑后的临时文件。

        Raises:
            ParseError, InvalidJSONError
        """
        text = Path(self.path).read_text(encoding="utf-8")
        self.modified = file_checksum(self.path) != self.checksum
        self.change_set = parse(text)
        return self.change_set

    def cleanup(self):
        Path(self.path).unlink(missing_ok=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()


def run_edit_session(
    documents: List[Document],
    keys: List[str],
    editor_command: str,
    tips: bool = True,
    directory: str = ".",
) -> Tuple[EditSession, ApplyReport]:
    """
    完整的编辑流程：生成缓冲区 -> 编辑器 -> 解析 -> 应用到内存中的文档。
    任一步骤失败都会在写盘之前抛出异常；临时文件总会被清理。
    """
    with EditSession.create(documents, keys, directory=directory, tips=tips) as session:
        session.write()
        run_editor(session.path, editor_command)
        change_set = session.read()
    report = apply_changes(documents, change_set)
    return session, report
