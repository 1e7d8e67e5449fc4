# arena/commands/server_commands.py
"""Server-level commands: help, settings, lifecycle, diagnostics."""

import logging
import sys

from arena.commands.help_table import render_help
from arena.commands.registry import command
from arena.commands.validators import user_errors
from arena.expression import evaluate
from arena.routers import RouterKind
from arena.utils.errors import CommandError, ExpressionError, UsageError
from arena.utils.units import format_mib, pretty_print_time

logger = logging.getLogger(__name__)


def _memory_usage():
    """Peak resident set size of this process in bytes, or None if unknown."""
    if sys.platform == "win32":
        return None
    import resource
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS reports bytes
    return peak if sys.platform == "darwin" else peak * 1024


def _eval_scope(handle):
    return {
        "handle": handle,
        "settings": handle.settings,
        "players": handle.players,
        "worlds": handle.worlds,
        "routers": handle.routers,
        "connections": handle.connections,
        "ticker": handle.ticker,
        "commands": handle.commands,
        "running": handle.running,
        "uptime": handle.uptime,
    }


def _error_text(error):
    return str(error) or type(error).__name__


@command("help", description="display all registered commands and their relevant information")
def cmd_help(handle, argv):
    for line in render_help(handle.commands.all()):
        handle.logger.print(line)


@command("setting", args="<name> [value]", description="change/print the value of a setting")
@user_errors
def cmd_setting(handle, argv):
    if not argv:
        raise UsageError("no setting name provided")
    name = argv[0]
    if name not in handle.settings:
        raise CommandError("no such setting")
    if len(argv) >= 2:
        try:
            value = evaluate(" ".join(argv[1:]), handle.settings.to_dict())
        except ExpressionError as e:
            handle.logger.print(_error_text(e))
            return
        settings = handle.settings.copy()
        try:
            settings[name] = value
        except TypeError as e:
            raise UsageError(f"invalid value for {name}: {e}")
        handle.set_settings(settings)
        logger.info(f"Setting {name} changed to {settings[name]!r}")
    handle.logger.print(handle.settings[name])


@command("stop", description="close the server")
def cmd_stop(handle, argv):
    if not handle.stop():
        handle.logger.print("failed")


@command("start", description="start the server")
def cmd_start(handle, argv):
    if not handle.start():
        handle.logger.print("failed")


@command("restart", description="restart the server")
def cmd_restart(handle, argv):
    if not handle.stop():
        handle.logger.print("failed")
        return
    if not handle.start():
        handle.logger.print("failed")


@command("eval", args="<expression>", description="evaluate an expression in the context of the handle and print the output")
def cmd_eval(handle, argv):
    try:
        result = evaluate(" ".join(argv), _eval_scope(handle))
    except Exception as e:
        # Unexpected failures inside attribute access are reported too
        result = _error_text(e)
    handle.logger.print(result)


@command("test", description="test command")
def cmd_test(handle, argv):
    handle.logger.print("success successful")


@command("stats", description="display critical information about the server")
def cmd_stats(handle, argv):
    out = handle.logger
    if not handle.running:
        out.print("not running")
        return

    out.print(f"average tick time: {handle.average_tick_time:.2f} ms / {handle.tick_delay} ms")
    memory = _memory_usage()
    if memory is None:
        out.print("memory usage unavailable")
    else:
        out.print(f"{format_mib(memory)} peak resident")
    out.print(f"running for {pretty_print_time(handle.uptime)}")

    connections = len(handle.connections)
    bots = sum(1 for router in handle.routers if router.kind is not RouterKind.HUMAN)
    out.print(f"{len(handle.players)} players, {connections} connections, {bots} bots")
    out.print(f"{len(handle.worlds)} worlds:")
    for world_id in sorted(handle.worlds):
        world = handle.worlds[world_id]
        world.update_stats()
        stats = world.stats
        out.print(
            f"world {world_id}: {len(world.cells)} cells, "
            f"({len(world.player_cells)}/{world.pellet_count}/{world.virus_count}"
            f"/{len(world.ejected_cells)}/{world.mothercell_count})"
        )
        out.print(
            f"    {stats.external} / {stats.limit} players, {stats.playing} playing, "
            f"{stats.spectating} spectating, {stats.internal} bots"
        )


@command("pause", description="pause the server")
def cmd_pause(handle, argv):
    if not handle.running:
        handle.logger.print("handle not started")
        return
    if not handle.ticker.is_running:
        handle.logger.print("not running")
        return
    handle.ticker.stop()
    handle.logger.print("paused")


@command("resume", description="unpause the server")
def cmd_resume(handle, argv):
    if not handle.running:
        handle.logger.print("handle not started")
        return
    if handle.ticker.is_running:
        handle.logger.print("already running")
        return
    handle.ticker.start()
    handle.logger.print("resumed")


def register_commands(dispatcher):
    """Register all server commands with the dispatcher."""
    dispatcher.register(
        cmd_help,
        cmd_setting,
        cmd_stop,
        cmd_start,
        cmd_restart,
        cmd_eval,
        cmd_test,
        cmd_stats,
        cmd_pause,
        cmd_resume,
    )
