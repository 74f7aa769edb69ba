"""
Problem definition: terrain profile and rainfall, with the aggregate
quantities used to classify the problem and to start the levelling.
"""
from dataclasses import dataclass
from numbers import Integral
from typing import Tuple

import numpy as np

from rainlevel.core.exceptions import ErrorContext, ProblemDefinitionError
from rainlevel.core.types import GroundArray, Profile


@dataclass(frozen=True)
class Problem:
    """
    Immutable description of a levelling problem.

    ``water_tot`` is fixed at construction. Every solution must hold the
    same amount of water.
    """
    water_0: float  # rain depth on each column
    grounds: Tuple[int, ...]
    water_tot: float  # total amount of water, conserved
    ground_max: int
    ground_min: int
    ground_vol: int

    # amount of water that fills all wells level with the highest peak
    saturation_water: int

    @classmethod
    def from_profile(cls, duration: int, profile: Profile) -> "Problem":
        """Build a problem from a rain duration and column heights"""
        context = ErrorContext(component="Problem", operation="from_profile")

        if isinstance(duration, bool) or not isinstance(duration, Integral) or duration < 0:
            raise ProblemDefinitionError(
                f"Duration must be a non-negative integer, got {duration!r}", context
            )

        grounds = tuple(profile)
        if not grounds:
            raise ProblemDefinitionError("Profile must hold at least one column", context)

        for i, g in enumerate(grounds):
            if isinstance(g, bool) or not isinstance(g, Integral) or g < 0:
                raise ProblemDefinitionError(
                    f"Column {i} must be a non-negative integer height, got {g!r}", context
                )
        grounds = tuple(int(g) for g in grounds)

        size = len(grounds)
        ground_max = max(grounds)
        ground_vol = sum(grounds)
        water_0 = float(duration)

        return cls(
            water_0=water_0,
            grounds=grounds,
            water_tot=water_0 * size,
            ground_max=ground_max,
            ground_min=min(grounds),
            ground_vol=ground_vol,
            saturation_water=size * ground_max - ground_vol,
        )

    @property
    def size(self) -> int:
        """Number of columns"""
        return len(self.grounds)

    @property
    def grounds_array(self) -> GroundArray:
        """Column heights as float array"""
        return np.asarray(self.grounds, dtype=float)

    def reversed(self) -> "Problem":
        """Same rainfall on the mirrored profile"""
        return Problem.from_profile(int(self.water_0), self.grounds[::-1])
