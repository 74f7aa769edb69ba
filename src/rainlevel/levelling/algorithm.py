"""
Raise-land algorithm for the general levelling problem.

The land of the whole terrain is raised until the water reaches the highest
peak. There the problem is divided into sub-problems left and right of the
peak, and each is raised until it reaches its own highest peak.
"""
import logging
from typing import Optional

from rainlevel.core.config import RainlevelConfig, get_config
from rainlevel.levelling.symmetry import SymmetryAverager
from rainlevel.model.problem import Problem
from rainlevel.model.solution import Solution

logger = logging.getLogger(__name__)


def raise_levels(problem: Problem, config: Optional[RainlevelConfig] = None) -> Solution:
    """
    Level the water of a general problem.

    Raises:
        ConvergenceError: lift finishing strategy failed to converge
        WaterBalanceError: the result does not conserve water
    """
    config = config or get_config()

    averager = SymmetryAverager(config.levelling, config.solver)
    levels = averager.levels(problem.grounds_array, problem.water_tot)
    solution = Solution.from_levels(levels, problem.grounds)

    if config.levelling.check_conservation:
        error = solution.check_conservation(problem.water_tot)
        solution.check_non_negative()
        logger.debug(f"Water balance error {error:.3e} for {problem.size} columns")

    return solution
