"""Mapping between the rotation speed slider and the favourite levels."""

from __future__ import annotations

from collections.abc import Sequence

from .const import FAVORITE_LEVEL_BOUNDARIES


class LevelMapper:
    """Convert between a 0-100 position and a discrete level.

    Level ``i`` covers the half-open band ``(boundaries[i-1], boundaries[i]]``,
    so a table of ``n`` boundaries yields levels 1 to ``n - 1``.
    """

    def __init__(self, boundaries: Sequence[int] = FAVORITE_LEVEL_BOUNDARIES) -> None:
        """Initialize the mapper.

        Args:
            boundaries: Strictly increasing band edges starting at 0 and
                ending at 100. Fewer than two edges make a degenerate
                mapper that always answers level 1.

        Raises:
            ValueError: If the table is not a valid boundary table

        """
        table = tuple(boundaries)
        if len(table) >= 2:
            if table[0] != 0 or table[-1] != 100:
                raise ValueError(f"Boundaries must start at 0 and end at 100: {table}")
            if any(low >= high for low, high in zip(table, table[1:])):
                raise ValueError(f"Boundaries must be strictly increasing: {table}")
        self.boundaries = table

    @property
    def max_level(self) -> int:
        """Return the highest level, 1 for a degenerate table."""
        return max(len(self.boundaries) - 1, 1)

    def _in_band(self, level: int, position: float | None) -> bool:
        if position is None:
            return False
        return self.boundaries[level - 1] < position <= self.boundaries[level]

    def level_for_position(self, position: float) -> int:
        """Return the level whose band contains ``position``."""
        if len(self.boundaries) < 2:
            return 1
        for level in range(1, len(self.boundaries)):
            if self._in_band(level, position):
                return level
        return 1

    def position_for_level(self, level: int, current_position: float | None) -> float | None:
        """Return the slider position to display for ``level``.

        A current position already inside the level's band is kept as is,
        anything else snaps to the band's upper edge.
        """
        if len(self.boundaries) < 2:
            return current_position
        level = min(max(level, 1), self.max_level)
        if self._in_band(level, current_position):
            return current_position
        return self.boundaries[level]
