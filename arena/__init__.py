# arena/__init__.py
"""
Cell arena server core with an embedded administrative console.
"""

from arena.commands import CommandDescriptor, CommandDispatcher, CommandRegistry, create_default_dispatcher
from arena.handle import ServerHandle
from arena.settings import Settings

__all__ = [
    'CommandDescriptor', 'CommandDispatcher', 'CommandRegistry',
    'ServerHandle', 'Settings', 'create_default_dispatcher',
]
