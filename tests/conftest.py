"""Shared fixtures: a started handle whose ticks are driven by the tests."""

import io

import pytest

from arena.commands import create_default_dispatcher
from arena.handle import ServerHandle
from arena.routers import Connection
from arena.settings import Settings
from arena.utils.logger import ConsoleOutput


@pytest.fixture
def output():
    return ConsoleOutput(io.StringIO())


@pytest.fixture
def handle(output):
    handle = ServerHandle(Settings(), output)
    handle.start(start_ticker=False)
    yield handle
    handle.stop()


@pytest.fixture
def dispatcher(handle):
    return create_default_dispatcher(handle.commands)


@pytest.fixture
def run(handle, dispatcher, output):
    """Dispatch one line and return the lines it printed."""
    def _run(line):
        output.clear()
        dispatcher.dispatch(line, handle)
        return list(output.history)
    return _run


@pytest.fixture
def world(handle):
    return handle.worlds[1]


@pytest.fixture
def connection(handle, world):
    """A human connection with one live cell in world 1."""
    conn = Connection(handle, "127.0.0.1:50000")
    conn.join(world)
    conn.spawn()
    return conn
