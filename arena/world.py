# arena/world.py
"""Worlds and the cells they contain."""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum

import numpy as np

from arena.player import PlayerState
from arena.routers import RouterKind
from arena.utils.units import mass_to_size, size_to_mass

logger = logging.getLogger(__name__)


class CellType(Enum):
    PLAYER = "player"
    PELLET = "pellet"
    VIRUS = "virus"
    EJECTED = "ejected"
    MOTHERCELL = "mothercell"


class Cell:
    """A circular cell. Mass and square size are both derived from size."""

    def __init__(self, cell_id, cell_type, x, y, size, owner=None):
        self.id = cell_id
        self.type = cell_type
        self.x = x
        self.y = y
        self.size = size
        self.owner = owner

    @property
    def square_size(self):
        return self.size * self.size

    @square_size.setter
    def square_size(self, value):
        self.size = math.sqrt(value)

    @property
    def mass(self):
        return size_to_mass(self.size)

    @mass.setter
    def mass(self, value):
        self.size = mass_to_size(value)

    @property
    def position(self):
        return np.array([self.x, self.y], dtype=float)

    @position.setter
    def position(self, value):
        self.x, self.y = float(value[0]), float(value[1])

    def __repr__(self):
        return f"<Cell {self.id} {self.type.value} mass={self.mass:.1f}>"


@dataclass
class WorldStats:
    """Aggregate player counts, refreshed on every world update."""
    limit: int = 0
    internal: int = 0
    external: int = 0
    playing: int = 0
    spectating: int = 0


class World:
    """A bounded arena holding cells and the players inside it."""

    def __init__(self, handle, world_id):
        self.handle = handle
        self.id = world_id
        self.width = handle.settings["world_border_width"]
        self.height = handle.settings["world_border_height"]
        self.cells = []
        self.buckets = {cell_type: [] for cell_type in CellType}
        self.players = []
        self.stats = WorldStats(limit=handle.settings["world_max_players"])
        self._next_cell_id = 1

    # Cell buckets
    @property
    def player_cells(self):
        return self.buckets[CellType.PLAYER]

    @property
    def ejected_cells(self):
        return self.buckets[CellType.EJECTED]

    @property
    def pellet_count(self):
        return len(self.buckets[CellType.PELLET])

    @property
    def virus_count(self):
        return len(self.buckets[CellType.VIRUS])

    @property
    def mothercell_count(self):
        return len(self.buckets[CellType.MOTHERCELL])

    def random_position(self):
        return (
            random.uniform(-self.width / 2, self.width / 2),
            random.uniform(-self.height / 2, self.height / 2),
        )

    def create_cell(self, cell_type, x, y, size, owner=None):
        cell = Cell(self._next_cell_id, cell_type, x, y, size, owner)
        self._next_cell_id += 1
        self.add_cell(cell)
        return cell

    def add_cell(self, cell):
        self.cells.append(cell)
        self.buckets[cell.type].append(cell)
        if cell.owner is not None:
            cell.owner.owned_cells.append(cell)

    def remove_cell(self, cell):
        """Remove a cell from the world and from its owner."""
        self.cells.remove(cell)
        self.buckets[cell.type].remove(cell)
        if cell.owner is not None and cell in cell.owner.owned_cells:
            cell.owner.owned_cells.remove(cell)

    def pop_player_cell(self, cell):
        """Split a player cell into equal pieces arranged around it.

        The number of pieces is bounded by the owner's remaining cell
        budget and by how many minimum-mass pieces the cell can afford.
        Total square size is preserved.

        Returns:
            int: Number of new cells created
        """
        owner = cell.owner
        settings = self.handle.settings
        budget = settings["player_max_cells"] - len(owner.owned_cells)
        pieces = min(budget + 1, int(cell.mass // settings["player_min_mass"]))
        if pieces < 2:
            return 0

        piece_square_size = cell.square_size / pieces
        cell.square_size = piece_square_size
        radius = cell.size
        angles = np.linspace(0, 2 * np.pi, pieces - 1, endpoint=False)
        for angle in angles:
            self.create_cell(
                CellType.PLAYER,
                cell.x + radius * np.cos(angle),
                cell.y + radius * np.sin(angle),
                math.sqrt(piece_square_size),
                owner,
            )
        logger.debug(f"Popped cell {cell.id} of player {owner.id} into {pieces} pieces")
        return pieces - 1

    def add_player(self, player):
        self.players.append(player)
        player.world = self
        logger.debug(f"Player {player.id} joined world {self.id}")

    def remove_player(self, player):
        for cell in list(player.owned_cells):
            self.remove_cell(cell)
        if player in self.players:
            self.players.remove(player)
        player.world = None
        logger.debug(f"Player {player.id} left world {self.id}")

    def spawn_player(self, player, mass=None, position=None):
        """Give a player in this world a fresh cell."""
        if mass is None:
            mass = self.handle.settings["player_start_mass"]
        x, y = position if position is not None else self.random_position()
        return self.create_cell(CellType.PLAYER, x, y, mass_to_size(mass), player)

    def update(self):
        for player in list(self.players):
            if player.router is not None:
                player.router.update()
        self.update_stats()

    def update_stats(self):
        internal = external = playing = spectating = 0
        for player in self.players:
            if player.router is None or player.router.kind is not RouterKind.HUMAN:
                internal += 1
                continue
            external += 1
            if player.state is PlayerState.ALIVE:
                playing += 1
            else:
                spectating += 1
        self.stats.limit = self.handle.settings["world_max_players"]
        self.stats.internal = internal
        self.stats.external = external
        self.stats.playing = playing
        self.stats.spectating = spectating

    def __repr__(self):
        return f"<World {self.id} cells={len(self.cells)} players={len(self.players)}>"
