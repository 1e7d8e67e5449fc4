# arena/commands/world_commands.py
"""Commands that manage the bots of a world."""

from arena.commands.registry import command
from arena.commands.validators import lookup_world, parse_count, user_errors
from arena.routers import PlayerBot, RouterKind


@command("addbot", args="<world id> [count=1]", description="assign player bots to a world")
@user_errors
def cmd_addbot(handle, argv):
    world = lookup_world(handle, argv)
    count = parse_count(argv)

    for _ in range(count):
        PlayerBot(world)
    handle.logger.print(f"added {max(count, 0)} player bots to world")


@command("killbot", args="<world id> [count=1]", description="remove player bots from a world")
@user_errors
def cmd_killbot(handle, argv):
    world = lookup_world(handle, argv)
    count = parse_count(argv)

    bots = [
        player.router for player in world.players
        if player.router is not None and player.router.kind is RouterKind.BOT
    ]
    removed = 0
    for bot in bots[:max(count, 0)]:
        bot.close()
        removed += 1
    handle.logger.print(f"removed {removed} player bots from world")


def register_commands(dispatcher):
    """Register all world commands with the dispatcher."""
    dispatcher.register(cmd_addbot, cmd_killbot)
