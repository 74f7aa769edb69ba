"""
Recursive divide-and-conquer levelling.

For a range of columns the highest peak is found. If the range holds
enough water to submerge that peak, the range is levelled uniformly.
Otherwise the peak stays dry, the water is split between the ranges left
and right of it, and both are levelled in turn: left first, then right.

The recursion is unrolled into a LIFO work list so that long monotone
profiles do not exhaust the interpreter's recursion limit. The order in
which ranges are finalized is the same as with plain recursion.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from rainlevel.core.config import LevellingConfig, SolverConfig
from rainlevel.core.exceptions import ErrorContext, ProblemDefinitionError
from rainlevel.core.types import FinishingStrategy, GroundArray
from rainlevel.levelling.collector import Collector
from rainlevel.levelling.distribution import DistributionRequest, distribute_water
from rainlevel.levelling.equation import LevellingEquation
from rainlevel.levelling.solver import IterativeSolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeParameters:
    """Water budget and bounds of one range, indices inclusive"""
    water: float
    start: int
    end: int
    left_edge_peaks: int = 0
    right_edge_peaks: int = 0
    depth: int = 0  # diagnostic only

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class Peak:
    """Highest plateau of a range, position relative to the range"""
    height: float
    index: int
    width: int

    def has_left(self) -> bool:
        return self.index != 0

    def has_right(self, length: int) -> bool:
        return self.index + self.width != length


def find_peak(grounds: GroundArray) -> Peak:
    """First tallest column and the width of the plateau it starts"""
    i_peak = int(np.argmax(grounds))
    height = float(grounds[i_peak])

    lower = grounds[i_peak:] != height
    width = int(np.argmax(lower)) if lower.any() else grounds.size - i_peak
    return Peak(height=height, index=i_peak, width=width)


class LevelRecursor:
    """Levels one terrain profile into a Collector"""

    def __init__(
        self,
        config: Optional[LevellingConfig] = None,
        solver_config: Optional[SolverConfig] = None
    ):
        self.config = config or LevellingConfig()
        self.solver = IterativeSolver(solver_config)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def run(self, grounds: GroundArray, water: float) -> Collector:
        """
        Level ``water`` over ``grounds``.

        Returns:
            Collector with every column finalized
        """
        grounds = np.asarray(grounds, dtype=float)
        if grounds.size == 0:
            raise ProblemDefinitionError(
                "Cannot level an empty profile",
                ErrorContext(component="LevelRecursor", operation="run"),
            )

        collector = Collector(grounds.size)
        pending = [RangeParameters(water=float(water), start=0, end=grounds.size - 1)]

        while pending:
            pars = pending.pop()
            collector, children = self.level_range(pars, grounds, collector)
            # left is processed before right
            pending.extend(reversed(children))

        return collector

    def level_range(
        self,
        pars: RangeParameters,
        grounds: GroundArray,
        collector: Collector
    ) -> Tuple[Collector, List[RangeParameters]]:
        """
        Finalize what can be finalized in one range.

        Returns:
            The collector and the sub-ranges still to be levelled, left first
        """
        segment = grounds[pars.start:pars.end + 1]
        peak = find_peak(segment)
        absolute_peak = pars.start + peak.index

        has_left = peak.has_left()
        has_right = peak.has_right(segment.size)

        # peaks at the edge of this range are a special condition for water
        # distribution one level down
        new_left_edge_peaks = peak.width if not has_left else 0
        new_right_edge_peaks = peak.width if not has_right else 0

        submerged, lift = self.is_submerged(pars, segment, peak)
        if submerged:
            level = (pars.water + float(np.sum(segment))) / segment.size
            self.logger.debug(
                f"Range {pars.start}..{pars.end} submerged at level {level:.6g} "
                f"(depth {pars.depth})"
            )
            collector.set_levels(pars.start, pars.end, level, pars.depth, lift)
            return collector, []

        # the peak and its adjacent neighbours are dry
        collector.set_levels(
            absolute_peak, absolute_peak + peak.width - 1, peak.height, pars.depth, lift
        )

        left_grounds = segment[:peak.index]
        right_grounds = segment[peak.index + peak.width:]

        distribution = distribute_water(DistributionRequest(
            water=pars.water,
            peak_height=peak.height,
            peak_width=peak.width,
            left_grounds=left_grounds,
            right_grounds=right_grounds,
            at_left_edge=pars.start == 0,
            at_right_edge=pars.end == collector.size - 1,
            left_edge_peaks=pars.left_edge_peaks,
            right_edge_peaks=pars.right_edge_peaks,
            start=pars.start,
            end=pars.end,
            depth=pars.depth,
        ))

        children = []
        if has_left:
            children.append(RangeParameters(
                water=distribution.left,
                start=pars.start,
                end=absolute_peak - 1,
                left_edge_peaks=new_left_edge_peaks,
                right_edge_peaks=new_right_edge_peaks,
                depth=pars.depth + 1,
            ))
        if has_right:
            children.append(RangeParameters(
                water=distribution.right,
                start=absolute_peak + peak.width,
                end=pars.end,
                left_edge_peaks=new_left_edge_peaks,
                right_edge_peaks=new_right_edge_peaks,
                depth=pars.depth + 1,
            ))
        return collector, children

    def is_submerged(
        self,
        pars: RangeParameters,
        segment: GroundArray,
        peak: Peak
    ) -> Tuple[bool, Optional[float]]:
        """
        Whether the range holds enough water to drown its peak.

        Returns:
            The decision and, for the lift strategy, the solved lift
        """
        if self.config.finishing is FinishingStrategy.VOLUME:
            return float(np.sum(segment)) + pars.water > peak.height * segment.size, None

        equation = LevellingEquation(water=pars.water, grounds=segment)
        result = self.solver.solve(
            equation,
            equation.initial_guess(self.config.initial_guess_factor),
            ErrorContext(
                component="LevelRecursor",
                operation="is_submerged",
                start=pars.start,
                end=pars.end,
                depth=pars.depth,
                details={"water": pars.water},
            ),
        )
        # a lift of zero, reached from below, means the range is saturated
        return result.root >= -self.solver.config.tolerance, result.root
