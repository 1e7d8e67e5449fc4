# arena/commands/validators.py
"""Argument parsing for the console's validation chain.

Each helper either returns the converted value or raises UsageError /
CommandError carrying the exact line the operator should see. Command
bodies are wrapped in ``user_errors`` so the first failure short-circuits
the command and is printed instead of raised.
"""

import functools
import logging
import math
import re

from arena.player import PlayerState
from arena.routers import RouterKind
from arena.utils.errors import CommandError, UsageError, UserError

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def user_errors(func):
    """Print a UserError raised by a command body instead of propagating it."""
    @functools.wraps(func)
    def wrapper(handle, argv):
        try:
            return func(handle, argv)
        except UserError as e:
            logger.debug(f"{func.__name__} rejected: {e}")
            handle.logger.print(str(e))
    return wrapper


def require_arg(argv, index, field):
    """Return argv[index] or fail with 'missing <field>'."""
    if len(argv) <= index:
        raise UsageError(f"missing {field}")
    return argv[index]


def optional_arg(argv, index, default):
    return argv[index] if len(argv) > index else default


def parse_int(value, field):
    """Parse the leading integer of ``value``.

    Trailing garbage is ignored ("12abc" -> 12), a value with no leading
    digits is rejected.
    """
    match = _INT_PREFIX.match(value)
    if not match:
        raise UsageError(f"invalid number for {field}")
    return int(match.group(1))


def parse_float(value, field, minimum=None):
    """Parse the leading decimal literal of ``value``.

    NaN, Inf and values below ``minimum`` (when given) are rejected.
    """
    match = _FLOAT_PREFIX.match(value)
    if not match:
        raise UsageError(f"invalid number for {field}")
    converted = float(match.group(1))
    if math.isnan(converted) or math.isinf(converted):
        raise UsageError(f"invalid number for {field}")
    if minimum is not None and converted < minimum:
        raise UsageError(f"invalid number for {field}")
    return converted


def lookup_player(handle, argv, index=0):
    """Resolve a player id argument against the handle's player registry."""
    player_id = parse_int(require_arg(argv, index, "player id"), "player id")
    player = handle.players.get(player_id)
    if player is None:
        raise CommandError("no player has this id")
    return player


def lookup_world(handle, argv, index=0):
    """Resolve a world id argument against the handle's world registry."""
    world_id = parse_int(require_arg(argv, index, "world id"), "world id")
    world = handle.worlds.get(world_id)
    if world is None:
        raise CommandError("no world has this id")
    return world


def parse_count(argv, index=1):
    """Optional count argument, defaulting to 1."""
    return parse_int(optional_arg(argv, index, "1"), "count")


def require_alive(player):
    if player.state is not PlayerState.ALIVE:
        raise CommandError("player is not alive")


def require_human(player):
    if player.router is None or player.router.kind is not RouterKind.HUMAN:
        raise CommandError("player is a bot")


def require_in_world(player):
    if player.world is None:
        raise CommandError("player is not in a world")
