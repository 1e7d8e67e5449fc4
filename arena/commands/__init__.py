# arena/commands/__init__.py
"""Console command registry and dispatch."""

from .registry import CommandDescriptor, CommandRegistry, command
from .dispatch import CommandDispatcher, create_default_dispatcher
from .help_table import render_help

__all__ = [
    'CommandDescriptor', 'CommandRegistry', 'CommandDispatcher',
    'command', 'create_default_dispatcher', 'render_help',
]
