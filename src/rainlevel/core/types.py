"""
Type definitions and type aliases for the rainlevel package.
"""
from enum import Enum
from typing import Sequence

import numpy as np
from typing_extensions import TypeAlias


# Type aliases for clarity
Height: TypeAlias = int  # column height, non-negative integer
Level: TypeAlias = float  # resting level of water or ground
Volume: TypeAlias = float  # water volume, one unit per column and time step
Profile: TypeAlias = Sequence[Height]

# Array types for static typing with numpy
GroundArray: TypeAlias = np.ndarray  # Shape: (n_columns,)
LevelArray: TypeAlias = np.ndarray  # Shape: (n_columns,)


class ProblemClass(str, Enum):
    """Categories of levelling problems, most trivial first"""
    DRY = "dry"  # no rain
    FLAT = "flat"  # all columns equally high
    SATURATION = "saturation"  # water fills exactly up to the highest peak
    ABOVE_SATURATION = "above_saturation"  # every column under water
    GENERAL = "general"  # needs the levelling algorithm

    @property
    def is_trivial(self) -> bool:
        return self is not ProblemClass.GENERAL


class FinishingStrategy(str, Enum):
    """How the recursor decides that a range is submerged"""
    VOLUME = "volume"  # ground volume + water exceeds volume below the peak
    LIFT = "lift"  # iterative solver finds a lift of zero


class OutputFormat(str, Enum):
    """Output formats of the command line interface"""
    LIST = "list"
    CSV = "csv"
    JSON = "json"
