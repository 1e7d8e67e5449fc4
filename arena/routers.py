# arena/routers.py
"""Routers: whatever controls a player.

A router is a human connection, an autonomous bot, or a minion bound to
a human connection. Role checks go through ``router.kind``.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class RouterKind(Enum):
    HUMAN = "human"
    BOT = "bot"
    MINION = "minion"


class Router:
    """Base router. Creating one registers a player on the handle."""

    kind = None

    def __init__(self, handle):
        self.handle = handle
        self.closed = False
        self.player = handle.create_player(self)
        handle.routers.append(self)

    def join(self, world):
        """Move the player into a world, leaving any previous one."""
        if self.player.world is not None:
            self.player.world.remove_player(self.player)
        world.add_player(self.player)

    def spawn(self, mass=None):
        if self.player.world is None:
            raise RuntimeError(f"Player {self.player.id} is not in a world")
        return self.player.world.spawn_player(self.player, mass=mass)

    def update(self):
        """Per-tick hook; controllers that decide movement override this."""
        pass

    def close(self):
        if self.closed:
            return
        self.closed = True
        if self.player.world is not None:
            self.player.world.remove_player(self.player)
        self.handle.remove_player(self.player.id)
        if self in self.handle.routers:
            self.handle.routers.remove(self)
        logger.debug(f"Closed {self.kind.value} router of player {self.player.id}")


class Connection(Router):
    """A human client connection."""

    kind = RouterKind.HUMAN

    def __init__(self, handle, remote_address="unknown"):
        super().__init__(handle)
        self.remote_address = remote_address
        self.minions = []
        handle.connections.append(self)
        logger.info(f"Connection from {remote_address} as player {self.player.id}")

    def close(self):
        if self.closed:
            return
        for minion in list(self.minions):
            minion.close()
        if self in self.handle.connections:
            self.handle.connections.remove(self)
        super().close()


class Minion(Router):
    """An auxiliary player controlled by a human connection."""

    kind = RouterKind.MINION

    def __init__(self, connection):
        super().__init__(connection.handle)
        self.connection = connection
        connection.minions.append(self)
        world = connection.player.world
        if world is not None:
            self.join(world)
            self.spawn(mass=self.handle.settings["minion_start_mass"])

    def close(self):
        if self.closed:
            return
        if self in self.connection.minions:
            self.connection.minions.remove(self)
        super().close()


class PlayerBot(Router):
    """An autonomous player inside one world."""

    kind = RouterKind.BOT

    def __init__(self, world):
        super().__init__(world.handle)
        self.join(world)
        self.spawn()

    def update(self):
        # Respawn after being eaten or killed
        if not self.player.owned_cells and self.player.world is not None:
            self.spawn()
