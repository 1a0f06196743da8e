# i18nedt/cli.py
"""
i18nedt CLI 主入口

    i18nedt locales/*.json -k home.title -k nav.home
    i18nedt 'locales/{{language}}/{{ns}}.json' -k common:hello --print
    i18nedt doctor locales/*.json
"""
import os
from pathlib import Path
from typing import List, Tuple

import click

from i18nedt import __version__
from i18nedt.core.applier import ApplyReport
from i18nedt.core.codec import render, serialize
from i18nedt.core.config import CONFIG_DIR, CONFIG_FILE, Config, load_config
from i18nedt.core.doctor import check, issue_keys
from i18nedt.core.editor import get_default_editor, validate_editor
from i18nedt.core.errors import I18nEditError
from i18nedt.core.flatten import flatten_json
from i18nedt.core.models import Document, split_composite_key
from i18nedt.core.session import EditSession, run_edit_session
from i18nedt.init import init_project as perform_init_project, validate_config_content
from i18nedt.storage import (
    FileSource, create_missing_namespaces, discover_files, load_documents, persist_documents,
)
from i18nedt.storage.discovery import split_env_files
from i18nedt.utils.console import (
    console, info, success, warning, error, heading, print_table, confirm, escape,
)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
FILES_ENV = "I18NEDT_FILES"
CONFIG_ENV = "I18NEDT_CONFIG"

# ------------------------------
# CLI 主入口
# ------------------------------

class DefaultCommandGroup(click.Group):
    """第一个参数不是子命令时，转发给默认命令 (edit)"""

    def __init__(self, *args, default_command: str = "edit", **kwargs):
        super().__init__(*args, **kwargs)
        self.default_command = default_command

    def parse_args(self, ctx, args):
        passthrough = set(ctx.help_option_names) | {"--version"}
        if args and args[0] not in self.commands and args[0] not in passthrough:
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, message="i18nedt version %(version)s")
@click.pass_context
def cli(ctx):
    """Batch-edit translation keys across locale JSON files in your editor."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())

# ------------------------------
# 辅助函数
# ------------------------------

def file_options(f):
    """为读取文件的子命令添加通用的文件参数和 --path-as-locale 选项"""
    f = click.option(
        "-P", "--path-as-locale", is_flag=True,
        help="Use the file path as the locale identifier",
    )(f)
    f = click.argument("files", nargs=-1)(f)
    return f


def _validate_keys(ctx, param, keys):
    """在打开编辑器之前拒绝无法写成缓冲区标题的 key"""
    for key in keys:
        _, bare_key = split_composite_key(key)
        if not bare_key.strip() or not all(part for part in bare_key.split(".")):
            raise click.BadParameter(f"'{key}': key path cannot be empty", ctx=ctx, param=param)
        if "\n" in key or "\r" in key:
            raise click.BadParameter(f"'{key}': key cannot span multiple lines", ctx=ctx, param=param)
    return keys


def _load_config() -> Config:
    try:
        return load_config(os.environ.get(CONFIG_ENV) or CONFIG_FILE)
    except I18nEditError as e:
        error(str(e))
        raise click.Abort()


def _resolve_file_args(files: Tuple[str, ...], config: Config) -> List[str]:
    """命令行参数 > I18NEDT_FILES > 配置文件"""
    if files:
        return list(files)
    env_files = split_env_files(os.environ.get(FILES_ENV, ""))
    if env_files:
        return env_files
    return list(config.files)


def _load(files: Tuple[str, ...], path_as_locale: bool, config: Config) -> Tuple[List[FileSource], List[Document]]:
    sources = discover_files(_resolve_file_args(files, config))
    documents = load_documents(sources, path_as_locale=path_as_locale or config.path_as_locale)
    if not documents:
        raise I18nEditError("no locale files could be loaded")
    return sources, documents


def _report_summary(session: EditSession, report: ApplyReport, saved: int):
    if not session.modified:
        info("The edit buffer was not modified.")
    elif session.change_set is not None and session.change_set.is_empty():
        info("The edit buffer is empty, nothing to apply.")

    if report.deleted:
        info(f"Deleted {len(report.deleted)} key(s)")
        for path, key in report.deleted:
            console.print(f"  [key]{escape(key)}[/key] ([path]{escape(path)}[/path])")

    if report.updated:
        info(f"Updated {len(report.updated)} value(s)")
        for path, key, locale in report.updated:
            console.print(f"  [key]{escape(key)}[/key] [locale]{escape(locale)}[/locale] ([path]{escape(path)}[/path])")

    for path, key, reason in report.skipped:
        warning(f"Skipped '{key}' in {path}: {reason}")

    if saved:
        success(f"Successfully updated {saved} file(s)")
    else:
        info("No files changed.")

# ------------------------------
# 命令 1: edit (默认命令)
# ------------------------------

@cli.command(name="edit", context_settings=CONTEXT_SETTINGS)
@file_options
@click.option("-k", "--key", "keys", multiple=True, required=True, callback=_validate_keys,
              help="Key to edit, optionally 'namespace:key' (can be specified multiple times)")
@click.option("-p", "--print", "print_only", is_flag=True,
              help="Print the edit buffer to stdout without launching the editor")
@click.option("-a", "--no-tips", is_flag=True, envvar="I18NEDT_NO_TIPS",
              help="Exclude the tips from the edit buffer")
@click.option("--editor", "editor_command", envvar="I18NEDT_EDITOR",
              help="Editor command (defaults to $EDITOR, then $VISUAL, then vim)")
def edit(files, path_as_locale, keys, print_only, no_tips, editor_command):
    """✏️  Edit KEYS of FILES in a single buffer"""
    config = _load_config()
    tips = not (no_tips or config.no_tips)

    try:
        editor = None
        if not print_only:
            editor = get_default_editor(editor_command or config.editor)
            validate_editor(editor)

        sources, documents = _load(files, path_as_locale, config)
        for namespace in create_missing_namespaces(documents, sources, keys):
            info(f"Creating new namespace '{namespace}'")

        if print_only:
            click.echo(render(serialize(documents, keys), tips=tips), nl=False)
            return

        session, report = run_edit_session(documents, list(keys), editor, tips=tips)
        saved = persist_documents(documents)
    except I18nEditError as e:
        error(str(e))
        raise click.Abort()

    _report_summary(session, report, saved)

# ------------------------------
# 命令 2: doctor
# ------------------------------

@cli.command(context_settings=CONTEXT_SETTINGS)
@file_options
@click.option("--simple", is_flag=True, help="Only print the keys that have issues")
@click.pass_context
def doctor(ctx, files, path_as_locale, simple):
    """🩺 Report missing and empty keys across locales"""
    config = _load_config()
    try:
        _, documents = _load(files, path_as_locale, config)
        results = check(documents)
    except I18nEditError as e:
        error(str(e))
        raise click.Abort()

    if simple:
        keys = issue_keys(results)
        for key in keys:
            click.echo(key)
        if keys:
            ctx.exit(1)
        return

    has_issues = False
    for path in sorted(results):
        result = results[path]
        if not result.has_issues:
            continue
        has_issues = True
        doc = result.document
        rows = [("missing", k) for k in result.missing_keys] + [("empty", k) for k in result.empty_keys]
        print_table(rows, headers=["Issue", "Key"],
                    title=f"{doc.path} (locale: {doc.locale}, namespace: {doc.namespace or '-'})")

    if not has_issues:
        success("No issues found! All keys are present and non-empty.")
        return
    ctx.exit(1)

# ------------------------------
# 命令 3: flatten
# ------------------------------

@cli.command(context_settings=CONTEXT_SETTINGS)
@file_options
def flatten(files, path_as_locale):
    """📄 Print FILES as flat key=value lines"""
    config = _load_config()
    try:
        _, documents = _load(files, path_as_locale, config)
        for doc in documents:
            flat = flatten_json(doc.data, doc.namespace)
            if len(documents) > 1:
                click.echo(f"// {doc.path}")
            for key in sorted(flat):
                click.echo(f"{key}={flat[key]}")
    except I18nEditError as e:
        error(str(e))
        raise click.Abort()

# ------------------------------
# 命令 4: init
# ------------------------------

@cli.command()
def init():
    """🔧 Create .i18nedt/config.yaml"""
    heading("Project Initialization")
    config_file = CONFIG_DIR / "config.yaml"

    if config_file.exists():
        if not confirm(f"{config_file} already exists. Overwrite?", default=False):
            info("Cancelled.")
            return
    try:
        config_content = perform_init_project()
        CONFIG_DIR.mkdir(exist_ok=True)
        config_file.write_text(config_content, encoding="utf-8")
        success(f"Generated: {config_file}")
    except OSError as e:
        error(f"Initialization failed: {e}")
        raise click.Abort()

# ------------------------------
# 命令 5: validate
# ------------------------------

@cli.command(name="validate")
def config_validate():
    """✅ Validate the configuration file"""
    heading("Validating Configuration")
    config_file = Path(os.environ.get(CONFIG_ENV) or CONFIG_FILE)
    if not config_file.exists():
        error(f"{config_file} not found. Run `i18nedt init` first.")
        raise click.Abort()
    content = config_file.read_text(encoding="utf-8")
    validate_config_content(content)
    success("Configuration file validated successfully!")

# ------------------------------
# 主入口
# ------------------------------
if __name__ == '__main__':
    cli(obj={})
