# tests/conftest.py
"""
i18nedt 测试配置和共享 fixtures
"""

import json
import os
import tempfile
from pathlib import Path

import pytest

from i18nedt.core.models import Document


# --- Pytest Fixtures ---

@pytest.fixture(scope="function")
def isolated_filesystem():
    """
    提供一个隔离的临时文件系统。
    在测试前后自动创建和清理临时目录，并切换当前工作目录。
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        original_cwd = os.getcwd()
        os.chdir(temp_path)
        yield temp_path
        os.chdir(original_cwd)  # 测试结束后恢复原始目录


@pytest.fixture
def write_json(isolated_filesystem):
    """在隔离目录中写入 JSON 文件，返回相对路径"""
    def _write(relative_path, data):
        target = isolated_filesystem / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return relative_path
    return _write


@pytest.fixture
def namespaced_documents():
    """两个 namespace (common, auth) × 两个 locale (en, zh) 的文档集合"""
    return [
        Document(path="locales/en/common.json", data='{"hello":"Hello","bye":"Bye"}', locale="en", namespace="common"),
        Document(path="locales/zh/common.json", data='{"hello":"你好"}', locale="zh", namespace="common"),
        Document(path="locales/en/auth.json", data='{"login":"Sign in"}', locale="en", namespace="auth"),
        Document(path="locales/zh/auth.json", data='{"login":"登录"}', locale="zh", namespace="auth"),
    ]


# --- CLI 测试的特殊 Fixture ---
@pytest.fixture
def runner():
    """提供一个 Click CliRunner 实例用于测试 CLI 命令"""
    from click.testing import CliRunner
    return CliRunner()
