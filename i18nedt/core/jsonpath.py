# i18nedt/core/jsonpath.py
"""
JSON 路径访问器：在单个 JSON 文档字符串中按点分路径读取、写入、删除值。

路径按 '.' 拆分，每一段都被视为对象的 key（数组下标不做特殊处理）。
文档始终以字符串形式传入和返回；写入后若内容与原文档等价，
返回原字符串对象本身，调用方可以据此廉价地识别空操作。
"""

import json
from typing import Any, Dict, List, Optional

from .errors import InvalidDocumentError, InvalidJSONError
from .models import TypedValue, ValueKind


def parse_key_path(path: str) -> List[str]:
    """将点分路径拆分为各级 key"""
    return path.split(".")


def compact(value: Any) -> str:
    """紧凑 JSON 序列化，保留非 ASCII 字符和 key 的原有顺序"""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def load_document(doc: str) -> Any:
    try:
        return json.loads(doc)
    except (TypeError, ValueError) as e:
        raise InvalidDocumentError(f"document is not valid JSON: {e}") from e


def load_fragment(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidJSONError(f"invalid JSON value: {e}") from e


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return compact(value)


def _resolve(root: Any, parts: List[str]) -> tuple:
    current = root
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return False, None
        current = current[part]
    return True, current


def get_value(doc: str, path: str) -> Optional[TypedValue]:
    """
    读取路径上的值。

    - 路径不存在时返回 None（不是错误）
    - 对象或数组返回 JSON 类型的值，raw 为该子树的紧凑 JSON
    - 其他标量返回字符串类型的值：字符串去掉引号，数字/布尔/null 使用 JSON 字面量
    """
    root = load_document(doc)
    found, value = _resolve(root, parse_key_path(path))
    if not found:
        return None
    if isinstance(value, (dict, list)):
        return TypedValue.json(compact(value))
    return TypedValue.string(_scalar_text(value))


def set_value(doc: str, path: str, value: TypedValue) -> str:
    """
    写入路径上的值，按需创建中间对象（非对象的中间节点会被覆盖）。
    结果与原文档等价时原样返回 doc。
    """
    root = load_document(doc)
    if value.kind is ValueKind.JSON:
        new_value = load_fragment(value.raw)
    else:
        new_value = value.raw

    original = compact(root)
    if not isinstance(root, dict):
        root = {}

    parts = parse_key_path(path)
    current: Dict[str, Any] = root
    for part in parts[:-1]:
        next_node = current.get(part)
        if not isinstance(next_node, dict):
            next_node = {}
            current[part] = next_node
        current = next_node
    current[parts[-1]] = new_value

    result = compact(root)
    if result == original:
        return doc
    return result


def delete_value(doc: str, path: str) -> str:
    """删除路径上的值；路径不存在时原样返回 doc"""
    root = load_document(doc)
    parts = parse_key_path(path)
    found, parent = _resolve(root, parts[:-1])
    if not found or not isinstance(parent, dict) or parts[-1] not in parent:
        return doc
    del parent[parts[-1]]
    return compact(root)
