# tests/test_config.py
"""
配置文件加载与 init 模板渲染测试
"""

import pytest
import yaml

from i18nedt.core.config import Config, load_config, validate_config_data
from i18nedt.core.errors import ConfigError
from i18nedt.init import DEFAULT_PATTERN, render_config


def test_missing_config_file_uses_defaults(isolated_filesystem):
    assert load_config(isolated_filesystem / "nope.yaml") == Config()


def test_load_config(isolated_filesystem):
    path = isolated_filesystem / "config.yaml"
    path.write_text(
        "files:\n  - 'locales/{{language}}/{{ns}}.json'\neditor: code --wait\nno_tips: true\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.files == ["locales/{{language}}/{{ns}}.json"]
    assert config.editor == "code --wait"
    assert config.no_tips is True
    assert config.path_as_locale is False


def test_single_file_string_is_accepted():
    assert Config.from_dict({"files": "en.json"}).files == ["en.json"]


def test_empty_config_file(isolated_filesystem):
    path = isolated_filesystem / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == Config()


def test_yaml_syntax_error(isolated_filesystem):
    path = isolated_filesystem / "config.yaml"
    path.write_text("files: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize("data", [
    {"files": 3},
    {"files": ["a.json", 1]},
    {"editor": ["vim"]},
    {"no_tips": "yes"},
    {"path_as_locale": 1},
])
def test_invalid_field_types(data):
    assert validate_config_data(data)
    with pytest.raises(ConfigError):
        Config.from_dict(data)


def test_non_mapping_config():
    assert validate_config_data(["files"]) == ["configuration must be a YAML mapping"]


def test_rendered_config_round_trips():
    content = render_config(
        project_name="demo",
        files=[DEFAULT_PATTERN, "extra/*.json"],
        editor="code --wait",
        no_tips=True,
        path_as_locale=False,
    )
    data = yaml.safe_load(content)
    assert validate_config_data(data) == []
    assert data == {
        "files": [DEFAULT_PATTERN, "extra/*.json"],
        "editor": "code --wait",
        "no_tips": True,
        "path_as_locale": False,
    }


def test_rendered_config_without_editor():
    content = render_config(project_name="demo", files=["en.json"], editor="", no_tips=False, path_as_locale=False)
    data = yaml.safe_load(content)
    assert "editor" not in data
    assert Config.from_dict(data).editor is None
