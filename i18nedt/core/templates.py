# i18nedt/core/templates.py
"""
内置 Jinja2 模板的加载与渲染（提示文本、配置文件）。
"""

from pathlib import Path

import jinja2

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def create_jinja_env() -> jinja2.Environment:
    loader = jinja2.FileSystemLoader(str(TEMPLATES_DIR))
    return jinja2.Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def render_template(name: str, **values) -> str:
    """渲染 templates/ 目录下的模板"""
    try:
        template = create_jinja_env().get_template(name)
    except jinja2.TemplateNotFound as e:
        raise FileNotFoundError(f"Template {name} not found in {TEMPLATES_DIR}") from e
    return template.render(**values)
