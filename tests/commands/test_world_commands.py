"""Tests for addbot and killbot."""

from arena.routers import RouterKind


def _bot_count(world):
    world.update_stats()
    return world.stats.internal


def test_addbot_then_killbot_restores_count(run, world):
    original = _bot_count(world)

    assert run("addbot 1 3") == ["added 3 player bots to world"]
    assert _bot_count(world) == original + 3
    assert run("stats")[-1].endswith(f"{original + 3} bots")

    assert run("killbot 1 3") == ["removed 3 player bots from world"]
    assert _bot_count(world) == original


def test_killbot_never_goes_negative(run, world):
    run("addbot 1 2")

    assert run("killbot 1 5") == ["removed 2 player bots from world"]
    assert _bot_count(world) == 0
    assert run("killbot 1") == ["removed 0 player bots from world"]
    assert _bot_count(world) == 0


def test_killbot_leaves_humans_and_minions(run, handle, connection, world):
    run(f"addminion {connection.player.id} 2")
    run("addbot 1 1")

    assert run("killbot 1 10") == ["removed 1 player bots from world"]
    kinds = sorted(p.router.kind.value for p in world.players)
    assert kinds == [RouterKind.HUMAN.value, RouterKind.MINION.value, RouterKind.MINION.value]


def test_addbot_defaults_to_one(run, world):
    assert run("addbot 1") == ["added 1 player bots to world"]
    assert len(world.players) == 1
    assert world.players[0].state.name == "ALIVE"


def test_bot_commands_validate_world(run):
    assert run("addbot") == ["missing world id"]
    assert run("killbot x") == ["invalid number for world id"]
    assert run("addbot 7") == ["no world has this id"]
    assert run("addbot 1 lots") == ["invalid number for count"]
