"""
Jinja2 environment shared by the template generators.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from ... import __version__
from ...cli_utils import COMMAND_NAME, reconstruct_command_line
from ...utils import camel_case, pascal_case, snake_case

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"


class TemplateRenderer:
    """Renders the templates of one template directory."""

    def __init__(self, template_lang: str):
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR / template_lang)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja_env.filters["snake_case"] = snake_case
        self.jinja_env.filters["camel_case"] = camel_case
        self.jinja_env.filters["pascal_case"] = pascal_case

    def render(self, template_name: str, **context) -> str:
        return self.jinja_env.get_template(template_name).render(**context)


def generation_comment() -> str:
    """Header line identifying the tool and the command that produced a file."""
    try:
        from ...graphql_generate import graphql_generate as click_command  # noqa

        command_line = reconstruct_command_line(click_command)
    except (ImportError, AttributeError):
        command_line = COMMAND_NAME

    return f"Generated by graphql_generate v{__version__} : {command_line}"
