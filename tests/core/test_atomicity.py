"""Ticks running on another thread never see a half-applied command."""

import threading

from arena.commands.registry import CommandDescriptor


def test_ticks_never_observe_partial_mass_update(handle, dispatcher, connection, world):
    player = connection.player
    for _ in range(7):
        world.spawn_player(player)

    torn = []
    original_tick = handle.tick

    def checking_tick():
        masses = {round(cell.mass, 6) for cell in player.owned_cells}
        if len(masses) > 1:
            torn.append(masses)
        original_tick()

    handle.ticker.step_fn = checking_tick
    done = threading.Event()

    def tick_loop():
        while not done.is_set():
            handle.ticker.step()

    ticker_thread = threading.Thread(target=tick_loop)
    ticker_thread.start()
    try:
        for i in range(300):
            dispatcher.dispatch(f"mass {player.id} {10 + i}", handle)
    finally:
        done.set()
        ticker_thread.join()

    assert torn == []
    assert handle.ticker.tick_count > 0


def test_tick_waits_for_slow_command(handle, dispatcher):
    """A tick requested mid-command only runs after the command finishes."""
    order = []
    inside = threading.Event()
    release = threading.Event()

    def slow(h, argv):
        order.append("command start")
        inside.set()
        release.wait(timeout=5)
        order.append("command end")

    handle.ticker.step_fn = lambda: order.append("tick")
    dispatcher.register(CommandDescriptor("slow", "", "", slow))

    command_thread = threading.Thread(target=dispatcher.dispatch, args=("slow", handle))
    command_thread.start()
    inside.wait(timeout=5)

    tick_thread = threading.Thread(target=handle.ticker.step)
    tick_thread.start()
    tick_thread.join(timeout=0.2)
    release.set()
    command_thread.join()
    tick_thread.join()

    assert order == ["command start", "command end", "tick"]
