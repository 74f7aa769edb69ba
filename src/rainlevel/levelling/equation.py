"""
Levelling equation.

The land of a range is raised by a lift value ``x``. Saturation is reached
when the water level equals the highest peak:

    v_underwater - v_displaced - v_water = 0

where v_underwater is the volume below the (lifted) highest peak and
v_displaced the volume of lifted ground above the baseline. The residual
is normalized by the number of columns.
"""
from dataclasses import dataclass

import numpy as np

from rainlevel.core.tolerance import is_zero
from rainlevel.core.types import GroundArray


def displaced_volume(x: float, grounds: GroundArray) -> float:
    """Volume of ground columns lifted by ``x`` that sits above the baseline"""
    lifted = x + grounds
    return float(np.sum(lifted[lifted > 0.0]))


def levelling_residual(x: float, water: float, grounds: GroundArray) -> float:
    """
    Normalized saturation residual for a lift ``x``.

    Zero means raising every column by ``x`` and filling with ``water``
    exactly reaches the current peak. A positive lift overshoots and is
    returned as is so the solver is pushed back down.
    """
    if is_zero(x):
        return 0.0
    if x >= 0.0:
        return x

    underwater = x + float(np.max(grounds))
    displaced = displaced_volume(x, grounds)
    return underwater - (displaced + water) / grounds.size


@dataclass(frozen=True)
class LevellingEquation:
    """Levelling residual bound to the water and grounds of one range"""
    water: float
    grounds: GroundArray

    def __call__(self, x: float) -> float:
        return levelling_residual(x, self.water, self.grounds)

    def initial_guess(self, factor: float = 1.0) -> float:
        """
        Lift estimate from the mean rain depth.

        A positive estimate means the range is already submerged, the guess
        is then clamped to zero where the residual vanishes.
        """
        guess = factor * self.water / self.grounds.size - float(np.max(self.grounds))
        return min(guess, 0.0)
