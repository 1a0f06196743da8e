# i18nedt/init.py
"""
项目初始化模块 (CLI 层交互与渲染)
此模块负责通过 CLI 交互收集信息并渲染配置文件内容。
文件的实际创建操作由 CLI 层 (i18nedt/cli.py) 执行。
"""

from pathlib import Path

import click
import yaml

from .core.config import validate_config_data
from .core.templates import render_template

CONFIG_TEMPLATE = "config.yaml.j2"
DEFAULT_PATTERN = "locales/{{language}}/{{ns}}.json"


def render_config(**values) -> str:
    """渲染配置文件模板"""
    return render_template(CONFIG_TEMPLATE, **values)


def init_project() -> str:
    """
    交互式初始化项目，返回渲染好的 config.yaml 内容。
    文件创建操作由调用者 (cli.py) 负责。
    """
    project_name = Path(".").resolve().name
    files = click.prompt(
        "Locale files (glob or {{language}}/{{ns}} pattern)",
        default=DEFAULT_PATTERN,
    )
    editor = click.prompt("Editor command (empty to use $EDITOR)", default="", show_default=False)
    no_tips = click.confirm("Omit the tips at the top of the edit buffer?", default=False)

    return render_config(
        project_name=project_name,
        files=[f for f in files.split() if f],
        editor=editor.strip(),
        no_tips=no_tips,
        path_as_locale=False,
    )


def validate_config_content(content: str):
    """验证配置内容字符串的合法性"""
    click.echo("Validating configuration...")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        click.echo(click.style("YAML syntax error!", fg="red"))
        click.echo(f"   {e}")
        raise click.Abort()

    if data is None:
        click.echo(click.style("Warning: configuration is empty.", fg="yellow"))
        return

    problems = validate_config_data(data)
    if problems:
        for problem in problems:
            click.echo(click.style(f"Error: {problem}", fg="red"))
        raise click.Abort()

    files = data.get("files") or []
    if isinstance(files, str):
        files = [files]
    click.echo(click.style(f"files: {len(files)} pattern(s)", fg="green"))
    if data.get("editor"):
        click.echo(f"editor: {data['editor']}")
    click.echo(click.style("Configuration is valid!", fg="green"))
