# arena/commands/dispatch.py
"""Console line dispatcher."""

import logging
from typing import Optional

from arena.commands.registry import CommandRegistry

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "unknown command"


class CommandDispatcher:
    """Tokenizes operator lines and runs the matching command.

    Each dispatch holds ``handle.lock`` for the whole command so a
    simulation tick can never observe a half-applied mutation.
    """

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self.registry = registry if registry is not None else CommandRegistry()

    def register(self, *descriptors):
        self.registry.register(*descriptors)

    def dispatch(self, line: str, handle) -> bool:
        """Run one console line against the handle.

        Args:
            line (str): Raw operator input
            handle: Live server handle

        Returns:
            bool: True if a command ran to completion
        """
        tokens = line.split()
        if not tokens:
            return False

        name, argv = tokens[0], tokens[1:]
        descriptor = self.registry.get(name)
        if descriptor is None:
            logger.debug(f"Unknown command: {name!r}")
            handle.logger.print(UNKNOWN_COMMAND)
            return False

        logger.debug(f"Dispatching {name} {argv}")
        try:
            with handle.lock:
                descriptor(handle, argv)
        except Exception as e:
            logger.error(f"Error executing command {name}: {e}", exc_info=True)
            handle.logger.print(f"error executing {name}: {e}")
            return False
        return True


def create_default_dispatcher(registry: Optional[CommandRegistry] = None) -> CommandDispatcher:
    """Create a dispatcher with all built-in commands registered.

    Returns:
        CommandDispatcher: Configured dispatcher
    """
    dispatcher = CommandDispatcher(registry)

    from arena.commands import server_commands
    from arena.commands import player_commands
    from arena.commands import world_commands

    server_commands.register_commands(dispatcher)
    player_commands.register_commands(dispatcher)
    world_commands.register_commands(dispatcher)

    return dispatcher
