# arena/player.py
"""Players: the identity a router controls inside a world."""

import logging
from enum import IntEnum

import numpy as np

logger = logging.getLogger(__name__)


class PlayerState(IntEnum):
    """Liveness of a player."""
    IDLE = -1        # not in any world
    ALIVE = 0        # owns at least one cell
    SPECTATING = 1   # in a world without cells


class Player:
    """A player owned by a router.

    The player does not own its world; it only references the world it
    joined (or None).
    """

    def __init__(self, handle, player_id, router):
        self.handle = handle
        self.id = player_id
        self.router = router
        self.world = None
        self.owned_cells = []
        self._last_center = np.zeros(2)

    @property
    def state(self):
        if self.owned_cells:
            return PlayerState.ALIVE
        if self.world is not None:
            return PlayerState.SPECTATING
        return PlayerState.IDLE

    @property
    def view_center(self):
        """Mean position of the owned cells, or the last known one."""
        if self.owned_cells:
            positions = np.array([(cell.x, cell.y) for cell in self.owned_cells], dtype=float)
            self._last_center = positions.mean(axis=0)
        return self._last_center

    def __repr__(self):
        return f"<Player {self.id} {self.state.name.lower()} cells={len(self.owned_cells)}>"
