# i18nedt/utils/checksum.py
import hashlib
from pathlib import Path
from typing import Union


def calculate_checksum(content: Union[str, bytes]) -> str:
    """计算编辑缓冲区内容的 SHA256 校验和，用于判断编辑器是否修改了文件"""
    if isinstance(content, str):
        content = content.encode('utf-8')
    return hashlib.sha256(content).hexdigest()


def file_checksum(path: Union[str, Path]) -> str:
    return calculate_checksum(Path(path).read_bytes())
