# arena/commands/help_table.py
"""Aligned NAME | ARGUMENTS | DESCRIPTION table for the help command."""

from typing import Iterable, List

from arena.commands.registry import CommandDescriptor

MIN_NAME_WIDTH = 4
MIN_ARGS_WIDTH = 10


def column_widths(descriptors: Iterable[CommandDescriptor]):
    """Return (name_width, args_width) over all descriptors.

    The name column reserves one trailing space after the longest name.
    """
    name_width, args_width = MIN_NAME_WIDTH, MIN_ARGS_WIDTH
    for descriptor in descriptors:
        name_width = max(name_width, len(descriptor.name) + 1)
        args_width = max(args_width, len(descriptor.args))
    return name_width, args_width


def render_help(descriptors: Iterable[CommandDescriptor]) -> List[str]:
    """Render the help table, one string per line, rows sorted by name."""
    descriptors = sorted(descriptors, key=lambda d: d.name)
    name_width, args_width = column_widths(descriptors)

    lines = [
        "NAME".ljust(name_width)
        + "ARGUMENTS".ljust(args_width)
        + " | DESCRIPTION"
    ]
    for descriptor in descriptors:
        lines.append(
            (descriptor.name + " ").ljust(name_width)
            + descriptor.args.ljust(args_width)
            + " | "
            + descriptor.description
        )
    return lines
