"""Problem and solution data carriers."""
from rainlevel.model.problem import Problem
from rainlevel.model.solution import Solution

__all__ = [
    "Problem",
    "Solution",
]
