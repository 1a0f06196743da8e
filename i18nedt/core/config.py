# i18nedt/core/config.py
"""
项目配置：.i18nedt/config.yaml

files:          默认的文件参数（glob 或 {{language}}/{{ns}} 模板）
editor:         编辑器命令
no_tips:        是否省略缓冲区顶部的提示
path_as_locale: 是否以文件路径作为 locale

优先级：命令行 > 环境变量 > 配置文件 > 默认值
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError

CONFIG_DIR = Path(".i18nedt")
CONFIG_FILE = CONFIG_DIR / "config.yaml"

BOOL_FIELDS = ("no_tips", "path_as_locale")


@dataclass
class Config:
    files: List[str] = field(default_factory=list)
    editor: Optional[str] = None
    no_tips: bool = False
    path_as_locale: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        problems = validate_config_data(data)
        if problems:
            raise ConfigError("; ".join(problems))
        files = data.get("files") or []
        if isinstance(files, str):
            files = [files]
        return cls(
            files=[str(f) for f in files],
            editor=data.get("editor") or None,
            no_tips=bool(data.get("no_tips", False)),
            path_as_locale=bool(data.get("path_as_locale", False)),
        )


def validate_config_data(data: Any) -> List[str]:
    """返回配置中的问题列表；空列表表示合法"""
    if data is None:
        return []
    if not isinstance(data, dict):
        return ["configuration must be a YAML mapping"]

    problems = []
    files = data.get("files")
    if files is not None and not isinstance(files, (list, str)):
        problems.append(f"files must be a list, got {type(files).__name__}")
    elif isinstance(files, list) and not all(isinstance(f, str) for f in files):
        problems.append("files must only contain strings")

    editor = data.get("editor")
    if editor is not None and not isinstance(editor, str):
        problems.append(f"editor must be a string, got {type(editor).__name__}")

    for name in BOOL_FIELDS:
        if name in data and not isinstance(data[name], bool):
            problems.append(f"{name} must be true or false")
    return problems


def load_config(path: Union[str, Path] = CONFIG_FILE) -> Config:
    """
    加载配置文件；文件不存在时返回默认配置。

    Raises:
        ConfigError: 文件无法读取、YAML 语法错误或字段类型错误
    """
    config_file = Path(path)
    if not config_file.exists():
        return Config()
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e
    return Config.from_dict(data or {})
