"""
Classification of levelling problems and their solvers.

Trivial problems are solved by closed-form expressions; only the general
case goes through the levelling algorithm. All solvers share the signature
``solver(problem) -> Solution``.
"""
import logging
from functools import partial
from typing import Callable, Optional

from rainlevel.core.config import RainlevelConfig, get_config
from rainlevel.core.tolerance import is_zero, nearly_equal
from rainlevel.core.types import ProblemClass
from rainlevel.levelling.algorithm import raise_levels
from rainlevel.model.problem import Problem
from rainlevel.model.solution import Solution

logger = logging.getLogger(__name__)

SolverFn = Callable[[Problem], Solution]


def categorise(problem: Problem) -> ProblemClass:
    """Find the most trivial class a problem belongs to"""
    # zero days of rain
    if is_zero(problem.water_0):
        return ProblemClass.DRY

    # flat world profile
    if problem.ground_max == problem.ground_min:
        return ProblemClass.FLAT

    # water level equal to highest land
    if nearly_equal(problem.water_tot, float(problem.saturation_water)):
        return ProblemClass.SATURATION

    # land is entirely under water
    if problem.water_tot > problem.saturation_water:
        return ProblemClass.ABOVE_SATURATION

    return ProblemClass.GENERAL


def dry(problem: Problem) -> Solution:
    """No rain: the levels are the bare grounds"""
    return Solution.from_levels(problem.grounds_array, problem.grounds)


def flat(problem: Problem) -> Solution:
    """Flat world: every column gets the same rain depth"""
    return Solution.from_levels(problem.grounds_array + problem.water_0, problem.grounds)


def saturation(problem: Problem) -> Solution:
    """The world is filled up to the level of the highest ground"""
    levels = [float(problem.ground_max)] * problem.size
    return Solution.from_levels(levels, problem.grounds)


def full(problem: Problem) -> Solution:
    """The world is filled above saturation"""
    water_extra = problem.water_tot - problem.saturation_water
    level = problem.ground_max + water_extra / problem.size
    return Solution.from_levels([level] * problem.size, problem.grounds)


TRIVIAL_SOLVERS = {
    ProblemClass.DRY: dry,
    ProblemClass.FLAT: flat,
    ProblemClass.SATURATION: saturation,
    ProblemClass.ABOVE_SATURATION: full,
}


def select_solver(problem: Problem, config: Optional[RainlevelConfig] = None) -> SolverFn:
    """Provide the adequate function to solve a given problem"""
    problem_class = categorise(problem)
    logger.info(f"Problem with {problem.size} columns classified as {problem_class.value}")

    if problem_class.is_trivial:
        return TRIVIAL_SOLVERS[problem_class]

    return partial(raise_levels, config=config or get_config())


def solve(problem: Problem, config: Optional[RainlevelConfig] = None) -> Solution:
    """Solve a problem with the solver selected for it"""
    solver = select_solver(problem, config)
    return solver(problem)
