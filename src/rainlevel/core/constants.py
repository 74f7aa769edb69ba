"""
Numerical constants and system-wide defaults.
"""
import sys
from typing import Final

# Machine epsilon for IEEE double precision
MACHINE_EPSILON: Final[float] = sys.float_info.epsilon

# Comparison of reals. The factors are a compromise between precision
# and numerical stability.
EPSILON: Final[float] = 128.0 * MACHINE_EPSILON
RELATIVE_FLOOR: Final[float] = 16.0 * MACHINE_EPSILON
SIMILARITY_FACTOR: Final[float] = 64.0

# Iterative solver defaults
SOLVER_TOLERANCE: Final[float] = 4.0 * EPSILON
SOLVER_MIN_STEP: Final[float] = SOLVER_TOLERANCE / 4.0
SOLVER_MAX_STEP: Final[float] = 0.1
SOLVER_MAX_ITERATIONS: Final[int] = 1000
SOLVER_BOOST: Final[float] = 3.0
SOLVER_DAMPING: Final[float] = 0.9

# Water distribution: minimum boundary correction for interior splits
MIN_BOUNDARY_CORRECTION: Final[float] = 0.5

# Input
DEFAULT_INPUT_FILE: Final[str] = "example.toml"
SUPPORTED_INPUT_SUFFIXES: Final[tuple] = (".toml", ".yaml", ".yml", ".json")
