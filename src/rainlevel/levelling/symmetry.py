"""
Forward/reverse averaging of the levelling passes.

The recursor always levels the left side of a peak before the right side
and treats ties and boundary corrections asymmetrically. Levelling the
mirrored profile as well and averaging both results compensates for the
direction bias at twice the cost.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import numpy as np

from rainlevel.core.config import LevellingConfig, SolverConfig
from rainlevel.core.tolerance import all_similar
from rainlevel.core.types import GroundArray, LevelArray
from rainlevel.levelling.recursor import LevelRecursor

logger = logging.getLogger(__name__)


class SymmetryAverager:
    """Runs the recursor on a profile and its mirror image"""

    def __init__(
        self,
        config: Optional[LevellingConfig] = None,
        solver_config: Optional[SolverConfig] = None
    ):
        self.config = config or LevellingConfig()
        self.solver_config = solver_config or SolverConfig()

    def forward(self, grounds: GroundArray, water: float) -> LevelArray:
        """Levels of a single left-to-right pass"""
        recursor = LevelRecursor(self.config, self.solver_config)
        return recursor.run(grounds, water).levels()

    def backward(self, grounds: GroundArray, water: float) -> LevelArray:
        """Levels of a pass over the mirrored profile, in original orientation"""
        grounds = np.asarray(grounds, dtype=float)
        return self.forward(grounds[::-1], water)[::-1]

    def passes(self, grounds: GroundArray, water: float) -> Tuple[LevelArray, LevelArray]:
        """Both passes; they share no state and may run concurrently"""
        if not self.config.parallel_passes:
            return self.forward(grounds, water), self.backward(grounds, water)

        with ThreadPoolExecutor(max_workers=2) as executor:
            forward = executor.submit(self.forward, grounds, water)
            backward = executor.submit(self.backward, grounds, water)
            return forward.result(), backward.result()

    def levels(self, grounds: GroundArray, water: float) -> LevelArray:
        """Averaged levels, or the forward pass when averaging is disabled"""
        if not self.config.symmetric:
            return self.forward(grounds, water)

        forward, backward = self.passes(grounds, water)
        if not all_similar(forward, backward):
            deviation = float(np.max(np.abs(forward - backward)))
            logger.warning(
                f"Forward and reverse passes disagree by up to {deviation:.3g}; "
                f"periodic terrains are a known limitation of the distribution rule"
            )
        return (forward + backward) / 2.0
