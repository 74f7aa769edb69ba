"""
Collector accumulating the levels finalized by each recursion step.
"""
from typing import Optional

import numpy as np

from rainlevel.core.exceptions import CollectorError, ErrorContext
from rainlevel.core.types import LevelArray


class Collector:
    """
    Per column output buffer.

    Every column starts unresolved (NaN) and is written exactly once, by the
    range that finalizes it. Besides the level it records the lift and the
    recursion depth at which the column was finalized.
    """

    def __init__(self, size: int):
        self.size = size
        self.segments = np.full(size, np.nan)
        self.lifts = np.full(size, np.nan)
        self.depths = np.full(size, -1, dtype=int)
        self.done = np.zeros(size, dtype=bool)

    def set_levels(
        self,
        start: int,
        end: int,
        level: float,
        depth: int = 0,
        lift: Optional[float] = None
    ):
        """Finalize columns ``start..end`` (inclusive) at ``level``"""
        if start < 0 or end >= self.size or start > end:
            raise CollectorError(
                f"Invalid range {start}..{end} for {self.size} columns",
                ErrorContext(component="Collector", operation="set_levels", start=start, end=end),
            )

        written = np.flatnonzero(self.done[start:end + 1])
        if written.size:
            raise CollectorError(
                f"Columns {(written + start).tolist()} already finalized",
                ErrorContext(
                    component="Collector", operation="set_levels",
                    start=start, end=end, depth=depth,
                ),
            )

        self.segments[start:end + 1] = level
        self.lifts[start:end + 1] = np.nan if lift is None else lift
        self.depths[start:end + 1] = depth
        self.done[start:end + 1] = True

    def set_level(self, index: int, level: float, depth: int = 0, lift: Optional[float] = None):
        """Finalize a single column"""
        self.set_levels(index, index, level, depth, lift)

    @property
    def complete(self) -> bool:
        return bool(np.all(self.done))

    def levels(self) -> LevelArray:
        """
        Finalized levels.

        Raises:
            CollectorError: if any column was never written
        """
        missing = np.flatnonzero(~self.done)
        if missing.size:
            raise CollectorError(
                f"Columns {missing.tolist()} were never finalized",
                ErrorContext(component="Collector", operation="levels"),
            )
        return self.segments.copy()

    def __repr__(self) -> str:
        return f"Collector(size={self.size}, done={int(np.sum(self.done))})"
