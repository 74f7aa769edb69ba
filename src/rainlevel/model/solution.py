"""
Solution of a levelling problem and its plausibility checks.

levels are the overall levels of water or dry land per column, whichever
is on top. water_covers is only the water upon the land. water_tot is the
overall amount of water and must match the problem's total.
"""
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd

from rainlevel.core.constants import EPSILON, SIMILARITY_FACTOR
from rainlevel.core.exceptions import (
    ErrorContext, ProblemDefinitionError, WaterBalanceError
)
from rainlevel.core.tolerance import similar
from rainlevel.core.types import LevelArray


@dataclass
class Solution:
    """Resting levels per column"""
    levels: LevelArray
    water_covers: LevelArray
    water_tot: float

    @classmethod
    def from_levels(cls, levels: Sequence[float], grounds: Sequence[float]) -> "Solution":
        """
        Assemble a solution.

        Args:
            levels: water or ground level per column
            grounds: bare ground per column

        Raises:
            ProblemDefinitionError: if the sequences differ in length
        """
        levels = np.asarray(levels, dtype=float)
        grounds = np.asarray(grounds, dtype=float)
        if levels.shape != grounds.shape:
            raise ProblemDefinitionError(
                f"Got {levels.size} levels for {grounds.size} columns",
                ErrorContext(component="Solution", operation="from_levels"),
            )

        water_covers = levels - grounds
        return cls(
            levels=levels,
            water_covers=water_covers,
            water_tot=float(np.sum(water_covers)),
        )

    @property
    def grounds(self) -> LevelArray:
        return self.levels - self.water_covers

    def check_conservation(self, expected_water: float) -> float:
        """
        Compare the recomputed water volume with the expected one.

        Returns:
            The signed difference

        Raises:
            WaterBalanceError: if the difference exceeds tolerance
        """
        error = self.water_tot - expected_water
        if not similar(self.water_tot, expected_water):
            raise WaterBalanceError(
                f"Water not conserved: expected {expected_water}, "
                f"got {self.water_tot} (error {error:.3e})",
                ErrorContext(
                    component="Solution",
                    operation="check_conservation",
                    details={"expected": expected_water, "received": self.water_tot},
                ),
            )
        return error

    def check_non_negative(self):
        """Raise if any column holds a negative amount of water"""
        scale = max(float(np.max(np.abs(self.levels))), 1.0) if self.levels.size else 1.0
        threshold = -SIMILARITY_FACTOR * EPSILON * scale
        negative = np.flatnonzero(self.water_covers < threshold)
        if negative.size:
            raise WaterBalanceError(
                f"Negative water cover at columns {negative.tolist()}",
                ErrorContext(
                    component="Solution",
                    operation="check_non_negative",
                    details={"covers": self.water_covers[negative].tolist()},
                ),
            )

    def to_list(self) -> List[float]:
        return self.levels.tolist()

    def to_frame(self) -> pd.DataFrame:
        """Per column table of ground, level and water cover"""
        return pd.DataFrame(
            {
                "ground": self.grounds,
                "level": self.levels,
                "water_cover": self.water_covers,
            },
            index=pd.RangeIndex(len(self.levels), name="column"),
        )
