"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path
from typing import Any

import click

PROGRAM_NAME = "json_schema_to_concerto"


def _format_value(value: Any) -> str:
    """Shorten existing paths to their file name for cleaner display."""
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    if isinstance(value, (list, tuple)):
        return "/".join(str(item) for item in value)
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the command line of the running command from its Click context.

    Options left at their default are omitted and boolean flags are shown
    without a value.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROGRAM_NAME

    cli_args = ctx.params
    if not cli_args:
        return PROGRAM_NAME

    arguments: list[str] = []
    options: list[str] = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if value is None or value == () or value is False:
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _format_value(value)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
