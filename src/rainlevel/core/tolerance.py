"""
Proximity tests for real numbers.

Floating point values produced by the levelling algorithm are never compared
with ``==``. Two values are considered equal when their difference is small
relative to their magnitude, with an absolute floor near zero.
"""
import sys
from typing import Sequence

from rainlevel.core.constants import EPSILON, RELATIVE_FLOOR, SIMILARITY_FACTOR


def _equal(a: float, b: float, epsilon: float, floor: float) -> bool:
    if a == b:
        return True

    diff = abs(a - b)
    norm = min(abs(a) + abs(b), sys.float_info.max)
    return diff < max(epsilon * norm, floor)


def _sequences(av: Sequence[float], bv: Sequence[float], epsilon: float, floor: float) -> bool:
    # two empty sequences are the same by definition
    if len(av) == 0 and len(bv) == 0:
        return True

    if len(av) != len(bv):
        return False

    return all(_equal(float(a), float(b), epsilon, floor) for a, b in zip(av, bv))


def nearly_equal(a: float, b: float) -> bool:
    """Whether ``a`` and ``b`` are equal within ``EPSILON``"""
    return _equal(a, b, EPSILON, RELATIVE_FLOOR)


def is_zero(x: float) -> bool:
    """Whether ``x`` is indistinguishable from zero"""
    return nearly_equal(x, 0.0)


def all_nearly_equal(av: Sequence[float], bv: Sequence[float]) -> bool:
    """Element-wise ``nearly_equal`` for two sequences of the same length"""
    return _sequences(av, bv, EPSILON, RELATIVE_FLOOR)


def similar(a: float, b: float) -> bool:
    """Looser comparison used for accumulated quantities such as volumes"""
    return _equal(a, b, SIMILARITY_FACTOR * EPSILON, SIMILARITY_FACTOR * RELATIVE_FLOOR)


def all_similar(av: Sequence[float], bv: Sequence[float]) -> bool:
    """Element-wise ``similar`` for two sequences of the same length"""
    return _sequences(
        av, bv, SIMILARITY_FACTOR * EPSILON, SIMILARITY_FACTOR * RELATIVE_FLOOR
    )
