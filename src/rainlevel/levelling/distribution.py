"""
Water distribution between the two sides of a peak.

Water is distributed like rain: evenly by area, as long as both sides have
room to take it in. When one side reaches its well capacity the excess
flows over the peak to the other side.
"""
import logging
from dataclasses import dataclass

import numpy as np

from rainlevel.core.constants import MIN_BOUNDARY_CORRECTION
from rainlevel.core.exceptions import (
    ErrorContext, WaterBalanceError, WellCapacityError
)
from rainlevel.core.tolerance import similar
from rainlevel.core.types import GroundArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionRequest:
    """Everything the distributor needs to know about one split"""
    water: float
    peak_height: float
    peak_width: int
    left_grounds: GroundArray
    right_grounds: GroundArray
    at_left_edge: bool  # range touches the left boundary of the terrain
    at_right_edge: bool  # range touches the right boundary of the terrain
    left_edge_peaks: int = 0
    right_edge_peaks: int = 0
    start: int = 0
    end: int = 0
    depth: int = 0

    @property
    def context(self) -> ErrorContext:
        return ErrorContext(
            component="WaterDistributor",
            operation="distribute_water",
            start=self.start,
            end=self.end,
            depth=self.depth,
        )


@dataclass(frozen=True)
class WaterDistribution:
    """Water assigned to either side of a peak"""
    left: float
    right: float

    @property
    def total(self) -> float:
        return self.left + self.right


def well_volume(grounds: GroundArray, height: float) -> float:
    """Volume a well can hold below ``height``"""
    return height * grounds.size - float(np.sum(grounds))


def rain_range(peak_width: int, grounds: GroundArray) -> float:
    """Area the rain falls upon: the side plus half of the peak plateau"""
    return peak_width / 2.0 + grounds.size


def distribute_water(request: DistributionRequest) -> WaterDistribution:
    """
    Split the water of a range between the sides of its peak.

    Raises:
        WaterBalanceError: if the split does not add up to the input
        WellCapacityError: if the side receiving overflow cannot hold it
    """
    water = request.water

    # trivial cases
    if request.left_grounds.size == 0:
        return WaterDistribution(left=0.0, right=water)
    if request.right_grounds.size == 0:
        return WaterDistribution(left=water, right=0.0)

    # The terrain has impermeable boundaries. A side that is not next to one
    # gets a correction for the peaks it faces beyond the range.
    left_range = rain_range(request.peak_width, request.left_grounds)
    if not request.at_left_edge:
        left_range += max(MIN_BOUNDARY_CORRECTION, float(request.left_edge_peaks))

    right_range = rain_range(request.peak_width, request.right_grounds)
    if not request.at_right_edge:
        right_range += max(MIN_BOUNDARY_CORRECTION, float(request.right_edge_peaks))

    total_range = left_range + right_range
    left_rain = left_range * water / total_range
    right_rain = right_range * water / total_range

    left_capacity = well_volume(request.left_grounds, request.peak_height)
    right_capacity = well_volume(request.right_grounds, request.peak_height)

    # if either side has not enough space to hold its rain, the excess
    # goes to the other side
    left, right = left_rain, right_rain
    if left_rain > left_capacity:
        left = left_capacity
        right = water - left
        _check_overflow(right, right_capacity, "right", request)
    elif right_rain > right_capacity:
        right = right_capacity
        left = water - right
        _check_overflow(left, left_capacity, "left", request)

    distribution = WaterDistribution(left=left, right=right)
    if not similar(distribution.total, water):
        context = request.context
        context.details = {"water": water, "left": left, "right": right}
        raise WaterBalanceError(
            f"Distributed {distribution.total} of {water} units of water", context
        )

    logger.debug(
        f"Split {water:.6g} at range {request.start}..{request.end}: "
        f"left={left:.6g} (capacity {left_capacity:.6g}), "
        f"right={right:.6g} (capacity {right_capacity:.6g})"
    )
    return distribution


def _check_overflow(received: float, capacity: float, side: str, request: DistributionRequest):
    if received > capacity and not similar(received, capacity):
        context = request.context
        context.details = {"side": side, "received": received, "capacity": capacity}
        raise WellCapacityError(
            f"The {side} well receives {received} but holds only {capacity}", context
        )
