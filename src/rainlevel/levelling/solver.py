"""
Solver for simple, nearly linear equations by iterative approximation.

The step size adapts to the distance of f(x) from zero. Steps that lower x
are damped relative to steps that raise it, which avoids wobbling around
the root. Use this only for harmless, monotone equations such as the
levelling residual.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from rainlevel.core.config import SolverConfig
from rainlevel.core.exceptions import ConvergenceError, ErrorContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverResult:
    """Outcome of an iterative solve"""
    root: float
    residual: float
    iterations: int


class IterativeSolver:
    """
    Adaptive-step solver for f(x) = 0.

    Raises ConvergenceError when the iteration cap is reached, callers may
    retry with another initial value or reject the input.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()

    def step_size(self, delta: float) -> float:
        """Size of the next step for residual ``delta``"""
        return min(max(self.config.boost * abs(delta), self.config.min_step), self.config.max_step)

    def solve(
        self,
        f: Callable[[float], float],
        x0: float,
        context: Optional[ErrorContext] = None
    ) -> SolverResult:
        """
        Solve f(x) = 0 starting at ``x0``.

        Args:
            f: equation, increasing in x around the root
            x0: initial value
            context: error context attached to a ConvergenceError

        Returns:
            SolverResult with the root, its residual and the iteration count
        """
        x = x0
        delta = f(x)

        for iteration in range(1, self.config.max_iterations + 1):
            # finish criterion
            if abs(delta) < self.config.tolerance:
                return SolverResult(root=x, residual=delta, iterations=iteration)

            # approach zero from either side
            if delta < 0.0:
                x += self.step_size(delta)
            else:
                x -= self.config.lowering_factor * self.step_size(delta)

            delta = f(x)

            if iteration > self.config.max_iterations // 2:
                logger.debug(f"i={iteration} x={x!r} delta={delta!r}")

        if abs(delta) < self.config.tolerance:
            return SolverResult(root=x, residual=delta, iterations=self.config.max_iterations)

        context = context or ErrorContext()
        context.component = context.component or "IterativeSolver"
        context.operation = context.operation or "solve"
        context.details = {
            **(context.details or {}),
            "x0": x0,
            "x": x,
            "delta": delta,
            "max_iterations": self.config.max_iterations,
        }
        raise ConvergenceError(
            f"Solver reached max iterations: {self.config.max_iterations}, "
            f"delta: {delta!r}",
            context,
        )
