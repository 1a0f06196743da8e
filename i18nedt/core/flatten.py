# i18nedt/core/flatten.py
"""将 JSON 文档展开为 key -> JSON 字面量 的扁平映射"""

import json
from typing import Any, Dict

from .errors import InvalidDocumentError


def flatten_json(data: str, namespace: str = "") -> Dict[str, str]:
    """
    展开 JSON 文档。对象按 key 排序，数组以下标作为路径段，
    叶子节点的值保留 JSON 格式（字符串带引号）。
    namespace 非空时 key 带 "namespace:" 前缀。
    """
    try:
        root = json.loads(data)
    except ValueError as e:
        raise InvalidDocumentError(f"failed to parse JSON: {e}") from e

    prefix = f"{namespace}:" if namespace else ""
    result: Dict[str, str] = {}
    _traverse(root, "", prefix, result)
    return result


def _traverse(node: Any, path: str, prefix: str, result: Dict[str, str]):
    if isinstance(node, dict):
        for key in sorted(node):
            _traverse(node[key], f"{path}.{key}" if path else key, prefix, result)
    elif isinstance(node, list):
        for index, item in enumerate(node):
            _traverse(item, f"{path}.{index}" if path else str(index), prefix, result)
    else:
        result[prefix + path] = json.dumps(node, ensure_ascii=False)
