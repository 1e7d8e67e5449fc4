# arena/commands/player_commands.py
"""Commands that mutate a single player's cells and minions."""

from arena.commands.registry import command
from arena.commands.validators import (
    lookup_player, parse_count, parse_float, parse_int, require_alive,
    require_arg, require_human, require_in_world, user_errors,
)
from arena.routers import Minion
from arena.utils.errors import CommandError
from arena.utils.units import format_number, round_half_up


@command("mass", args="<id> <mass>", description="set cell mass to all of a player's cells")
@user_errors
def cmd_mass(handle, argv):
    raw_id = require_arg(argv, 0, "player id")
    raw_mass = require_arg(argv, 1, "mass input")
    player_id = parse_int(raw_id, "player id")
    player = handle.players.get(player_id)
    if player is None:
        raise CommandError("no player has this id")
    mass = parse_float(raw_mass, "mass input", minimum=0)
    require_alive(player)

    for cell in player.owned_cells:
        cell.mass = mass
    handle.logger.print(f"player now has {format_number(mass * len(player.owned_cells))} mass")


@command("merge", args="<id>", description="instantly merge a player")
@user_errors
def cmd_merge(handle, argv):
    player = lookup_player(handle, argv)
    require_alive(player)

    cells = list(player.owned_cells)
    square_size = sum(cell.square_size for cell in cells)
    center = player.view_center
    first = cells[0]
    first.square_size = square_size
    first.position = center
    for cell in cells[1:]:
        player.world.remove_cell(cell)
    handle.logger.print(f"merged player from {len(cells)} cells and {round_half_up(square_size / 100)} mass")


@command("kill", args="<id>", description="instantly kill a player")
@user_errors
def cmd_kill(handle, argv):
    player = lookup_player(handle, argv)
    require_alive(player)

    for cell in list(player.owned_cells):
        player.world.remove_cell(cell)
    handle.logger.print("killed player")


@command("pop", args="<id>", description="instantly pop a player's first cell")
@user_errors
def cmd_pop(handle, argv):
    player = lookup_player(handle, argv)
    require_alive(player)

    player.world.pop_player_cell(player.owned_cells[0])
    handle.logger.print("popped player")


@command("addminion", args="<id> [count=1]", description="assign minions to a player")
@user_errors
def cmd_addminion(handle, argv):
    player = lookup_player(handle, argv)
    count = parse_count(argv)
    require_human(player)
    require_in_world(player)

    for _ in range(count):
        Minion(player.router)
    handle.logger.print(f"added {max(count, 0)} minions to player")


@command("killminion", args="<id> [count=1]", description="remove assigned minions from a player")
@user_errors
def cmd_killminion(handle, argv):
    player = lookup_player(handle, argv)
    count = parse_count(argv)
    require_human(player)
    require_in_world(player)

    minions = player.router.minions
    removed = 0
    while removed < count and minions:
        minions[0].close()
        removed += 1
    handle.logger.print(f"removed {removed} minions from player")


def register_commands(dispatcher):
    """Register all player commands with the dispatcher."""
    dispatcher.register(
        cmd_mass,
        cmd_merge,
        cmd_kill,
        cmd_pop,
        cmd_addminion,
        cmd_killminion,
    )
