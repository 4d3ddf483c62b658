"""
Command line echo for the header of generated files.
"""

from pathlib import Path

import click

PROGRAM_NAME = "openapi_to_code"


def _display_value(value) -> str:
    # Existing files are shown by name only, so headers do not leak local paths
    if isinstance(value, (str, Path)) and Path(str(value)).exists():
        return Path(str(value)).name
    return str(value)


def reconstruct_command_line(click_command: click.Command | None = None) -> str:
    """
    Rebuild the invocation that is running, for the generated file's header.

    Positional arguments come first, then the options that differ from their
    default. Subcommands are prefixed with their name.

    Args:
        click_command: Command whose parameters are listed (the running
            command if omitted)

    Returns:
        The command line, or just the program name outside of a click run
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROGRAM_NAME

    if not ctx.params:
        return PROGRAM_NAME

    click_command = click_command or ctx.command
    parts = [PROGRAM_NAME]
    if ctx.parent is not None and ctx.info_name:
        parts.append(ctx.info_name)

    positionals = []
    flags = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Argument):
            positionals.append(_display_value(value))
        elif isinstance(param, click.Option) and value != param.default:
            opt = param.opts[0] if param.opts else f"--{param.name}"
            flags.extend([opt] if param.is_flag else [opt, _display_value(value)])

    return " ".join(parts + positionals + flags)
