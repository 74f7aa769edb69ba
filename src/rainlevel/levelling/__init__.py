"""Levelling core for the general problem."""
from rainlevel.levelling.algorithm import raise_levels
from rainlevel.levelling.collector import Collector
from rainlevel.levelling.distribution import (
    DistributionRequest,
    WaterDistribution,
    distribute_water,
    well_volume,
)
from rainlevel.levelling.equation import LevellingEquation, levelling_residual
from rainlevel.levelling.recursor import LevelRecursor, RangeParameters
from rainlevel.levelling.solver import IterativeSolver, SolverResult
from rainlevel.levelling.symmetry import SymmetryAverager

__all__ = [
    "raise_levels",
    "Collector",
    "DistributionRequest",
    "WaterDistribution",
    "distribute_water",
    "well_volume",
    "LevellingEquation",
    "levelling_residual",
    "LevelRecursor",
    "RangeParameters",
    "IterativeSolver",
    "SolverResult",
    "SymmetryAverager",
]
