"""Equilibrium water levels over one-dimensional terrain profiles."""
from rainlevel.model.problem import Problem
from rainlevel.model.solution import Solution
from rainlevel.solutions import categorise, select_solver, solve

__version__ = "0.3.0"

__all__ = [
    "Problem",
    "Solution",
    "categorise",
    "select_solver",
    "solve",
]
