"""
Tests for the exception hierarchy.
"""
from rainlevel.core.exceptions import (
    ConvergenceError, DataSourceError, DataValidationError, ErrorContext,
    LevellingError, RainlevelError, WaterBalanceError, WellCapacityError,
    handle_exception
)


def test_message_carries_context():
    error = ConvergenceError(
        "Solver reached max iterations",
        ErrorContext(component="IterativeSolver", start=2, end=5, depth=1),
    )
    text = str(error)
    assert text.startswith("ConvergenceError: Solver reached max iterations")
    assert "[Component: IterativeSolver]" in text
    assert "[Range: 2..5]" in text
    assert "[Depth: 1]" in text


def test_hierarchy():
    assert issubclass(WellCapacityError, WaterBalanceError)
    assert issubclass(WaterBalanceError, LevellingError)
    assert issubclass(ConvergenceError, LevellingError)
    assert issubclass(LevellingError, RainlevelError)


def test_handle_exception_maps_foreign_errors():
    assert isinstance(handle_exception(FileNotFoundError("x")), DataSourceError)
    assert isinstance(handle_exception(ValueError("x")), DataValidationError)

    own = WaterBalanceError("kept")
    assert handle_exception(own) is own
    assert type(handle_exception(ArithmeticError("x"))) is RainlevelError
