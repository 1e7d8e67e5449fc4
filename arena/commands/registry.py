# arena/commands/registry.py
"""Command descriptors and the registry that holds them."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Signature: (handle, argv) -> None
CommandAction = Callable[[object, List[str]], None]


@dataclass(frozen=True)
class CommandDescriptor:
    """One named console operation.

    ``args`` only documents the expected arguments for the help table;
    each action parses and validates its own argv.
    """
    name: str
    args: str
    description: str
    action: CommandAction

    def __post_init__(self):
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"Invalid command name: {self.name!r}")

    def __call__(self, handle, argv: List[str]) -> None:
        self.action(handle, argv)


def command(name: str, args: str = "", description: str = ""):
    """Decorator turning a function into a CommandDescriptor.

    Example:
        @command("test", description="test command")
        def cmd_test(handle, argv): ...
    """
    def decorator(func: CommandAction) -> CommandDescriptor:
        return CommandDescriptor(
            name=name,
            args=args,
            description=description or (func.__doc__ or "").strip(),
            action=func,
        )
    return decorator


class CommandRegistry:
    """Mapping from command name to descriptor.

    Registering a name that already exists replaces the whole entry, so
    later registrations can extend or override the built-in set.
    """

    def __init__(self):
        self._commands: Dict[str, CommandDescriptor] = {}

    def register(self, *descriptors: CommandDescriptor) -> None:
        """Register one or more commands."""
        for descriptor in descriptors:
            if descriptor.name in self._commands:
                logger.debug(f"Replacing command: {descriptor.name}")
            else:
                logger.debug(f"Registered command: {descriptor.name}")
            self._commands[descriptor.name] = descriptor

    def get(self, name: str) -> Optional[CommandDescriptor]:
        """Get a command by exact name."""
        return self._commands.get(name)

    def all(self) -> List[CommandDescriptor]:
        """All registered descriptors, in no particular order."""
        return list(self._commands.values())

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
