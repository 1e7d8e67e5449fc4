# arena/handle.py
"""ServerHandle: the live server state every console command operates on."""

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional

from arena.commands.registry import CommandRegistry
from arena.player import Player
from arena.routers import PlayerBot
from arena.settings import Settings, save_settings
from arena.ticker import Ticker
from arena.utils.logger import ConsoleOutput
from arena.world import World

logger = logging.getLogger(__name__)


class ServerHandle:
    """
    Aggregate of settings, worlds, players, lifecycle and ticker.

    The handle is passed explicitly to every command. ``lock`` is shared
    by the ticker and the dispatcher so that ticks and commands never
    interleave.
    """

    def __init__(self, settings: Optional[Settings] = None, output: Optional[ConsoleOutput] = None,
                 settings_path: Optional[str] = None):
        self.settings = settings if settings is not None else Settings()
        self.settings_path = settings_path
        self.logger = output if output is not None else ConsoleOutput()
        self.commands = CommandRegistry()
        self.lock = threading.RLock()

        self.running = False
        self.start_time: Optional[datetime] = None
        self.ticker = Ticker(self.tick, self.settings["server_tick_delay"], lock=self.lock)

        self.worlds: Dict[int, World] = {}
        self.players: Dict[int, Player] = {}
        self.routers: List = []
        self.connections: List = []
        self._next_player_id = 1

    @property
    def average_tick_time(self):
        return self.ticker.average_tick_time

    @property
    def tick_delay(self):
        return self.ticker.tick_delay

    @property
    def uptime(self):
        """Seconds since start, 0 when not running."""
        if not self.running or self.start_time is None:
            return 0
        return (datetime.now() - self.start_time).total_seconds()

    def set_settings(self, settings: Settings):
        """Apply settings to the running server and persist them."""
        with self.lock:
            self.settings = settings
            self.ticker.tick_delay = settings["server_tick_delay"]
            for world in self.worlds.values():
                world.update_stats()
        if self.settings_path:
            save_settings(settings, self.settings_path)
        logger.info("Settings applied")

    def start(self, start_ticker=True):
        """
        Start the server

        Returns:
            bool: True if the server was started, False if already running
        """
        with self.lock:
            if self.running:
                return False

            try:
                for _ in range(self.settings["world_min_count"]):
                    world = self.create_world()
                    for _ in range(self.settings["world_player_bots_per_world"]):
                        PlayerBot(world)
            except Exception:
                logger.error("Server start failed, rolling back")
                self._clear_state()
                raise

            self.running = True
            self.start_time = datetime.now()
            if start_ticker:
                self.ticker.start()
        logger.info(f"Server started with {len(self.worlds)} worlds")
        return True

    def stop(self):
        """
        Stop the server

        Returns:
            bool: True if the server was stopped, False if not running
        """
        with self.lock:
            if not self.running:
                return False

            self.ticker.stop()
            self._clear_state()
            self.running = False
            self.start_time = None
        logger.info("Server stopped")
        return True

    def _clear_state(self):
        for router in list(self.routers):
            router.close()
        self.worlds.clear()
        self.players.clear()

    def tick(self):
        for world in list(self.worlds.values()):
            world.update()

    def create_world(self):
        if len(self.worlds) >= self.settings["world_max_count"]:
            raise RuntimeError("world limit reached")
        world_id = 1
        while world_id in self.worlds:
            world_id += 1
        world = World(self, world_id)
        self.worlds[world_id] = world
        logger.info(f"Created world {world_id}")
        return world

    def remove_world(self, world_id):
        world = self.worlds.pop(world_id, None)
        if world is None:
            return False
        for player in list(world.players):
            if player.router is not None:
                player.router.close()
        logger.info(f"Removed world {world_id}")
        return True

    def create_player(self, router):
        player = Player(self, self._next_player_id, router)
        self.players[player.id] = player
        self._next_player_id += 1
        return player

    def remove_player(self, player_id):
        return self.players.pop(player_id, None)
