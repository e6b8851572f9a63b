"""Enums for board movement."""

from enum import Enum


class Direction(str, Enum):
    """Direction of a move on the board."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def step(self) -> int:
        """Index delta for this direction (left/up is towards index 1)."""
        if self in (Direction.LEFT, Direction.UP):
            return -1
        return 1


# Columns and cross-column task moves go sideways, in-column task moves go vertically
HORIZONTAL = (Direction.LEFT, Direction.RIGHT)
VERTICAL = (Direction.UP, Direction.DOWN)
