"""
CLI utilities for command line reconstruction and error reporting.
"""

from pathlib import Path

import click

from .pipeline.errors import AggregateWriteError, OrchestrationError

COMMAND_NAME = "graphql_generate"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return COMMAND_NAME

    cmd_parts = [COMMAND_NAME]

    for param in click_command.params:
        if not isinstance(param, click.Option) or param.name not in cli_args:
            continue

        value = cli_args[param.name]
        if not value or value == param.default:
            continue

        flag = param.opts[0] if param.opts else f"--{param.name}"
        if param.is_flag:
            cmd_parts.append(flag)
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)
        cmd_parts.extend([flag, formatted_value])

    return " ".join(cmd_parts)


def format_error_tree(error: BaseException, indent: int = 0) -> str:
    """
    Render an error and every error nested in it as an indented tree.

    Args:
        error: Top-level error
        indent: Indentation level of the top-level line

    Returns:
        Multi-line description
    """
    pad = "  " * indent
    lines = [f"{pad}{error}"]
    if isinstance(error, OrchestrationError):
        for pipeline, failure in error.failures.items():
            lines.append(f"{pad}  {pipeline}:")
            lines.append(format_error_tree(failure, indent + 2))
    elif isinstance(error, AggregateWriteError):
        for failure in error.errors:
            lines.append(f"{pad}  - {failure}")
    elif error.__cause__ is not None:
        lines.append(f"{pad}  caused by: {error.__cause__}")
    return "\n".join(lines)
