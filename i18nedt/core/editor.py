# i18nedt/core/editor.py
"""
外部编辑器的解析与调用。
"""

import os
import shlex
import shutil
import subprocess
from typing import List, Optional, Tuple

from .errors import EditorFailure

DEFAULT_EDITOR = "vim"


def get_default_editor(configured: Optional[str] = None) -> str:
    """
    选择编辑器命令：显式配置 > $EDITOR > $VISUAL > vim
    """
    for candidate in (configured, os.environ.get("EDITOR"), os.environ.get("VISUAL")):
        if candidate and candidate.strip():
            return candidate
    return DEFAULT_EDITOR


def parse_editor_command(command: str) -> Tuple[str, List[str]]:
    """将编辑器命令拆分为可执行文件和参数，如 'code --wait'"""
    parts = shlex.split(command or "")
    if not parts:
        return "", []
    return parts[0], parts[1:]


def validate_editor(command: str) -> str:
    """
    检查编辑器是否可用，返回可执行文件的完整路径。

    Raises:
        EditorFailure: 命令为空或不在 PATH 中
    """
    executable, _ = parse_editor_command(command)
    if not executable:
        raise EditorFailure("editor name cannot be empty")
    resolved = shutil.which(executable)
    if resolved is None:
        raise EditorFailure(f"editor '{executable}' not found in PATH")
    return resolved


def run_editor(path: str, command: str) -> int:
    """
    打开编辑器并阻塞直到其退出。

    Raises:
        EditorFailure: 编辑器不存在、无法启动或以非零状态退出
    """
    resolved = validate_editor(command)
    _, args = parse_editor_command(command)
    try:
        completed = subprocess.run([resolved, *args, path])
    except OSError as e:
        raise EditorFailure(f"failed to start editor '{command}': {e}") from e
    if completed.returncode != 0:
        raise EditorFailure(
            f"editor '{command}' exited with status {completed.returncode}",
            exit_code=completed.returncode,
        )
    return completed.returncode
