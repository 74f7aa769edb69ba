"""
Custom exception hierarchy for the rainlevel package.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    component: Optional[str] = None
    operation: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    depth: Optional[int] = None
    details: Optional[Dict[str, Any]] = None


class RainlevelError(Exception):
    """Base exception for all rainlevel errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"
        if self.context.operation:
            context_str += f" [Operation: {self.context.operation}]"
        if self.context.start is not None and self.context.end is not None:
            context_str += f" [Range: {self.context.start}..{self.context.end}]"
        if self.context.depth is not None:
            context_str += f" [Depth: {self.context.depth}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Data-related errors
class DataError(RainlevelError):
    """Base class for input data errors"""
    pass


class DataSourceError(DataError):
    """Input file could not be read"""
    pass


class DataValidationError(DataError):
    """Input content could not be parsed or violates the data contract"""
    pass


# Problem definition errors
class ProblemDefinitionError(RainlevelError):
    """Precondition violation, rejected before the levelling core runs"""
    pass


# Levelling errors
class LevellingError(RainlevelError):
    """Base class for failures inside the levelling core"""
    pass


class ConvergenceError(LevellingError):
    """Iterative solver exhausted its iteration budget"""
    pass


class WaterBalanceError(LevellingError):
    """Water volume is not conserved"""
    pass


class WellCapacityError(WaterBalanceError):
    """A well was assigned more water than it can hold below its peak"""
    pass


class CollectorError(LevellingError):
    """A column was written twice or never written"""
    pass


# Configuration errors
class ConfigurationError(RainlevelError):
    """Configuration error"""
    pass


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> RainlevelError:
    """
    Wrap generic exceptions in RainlevelError hierarchy.
    Useful for catching and categorizing third-party exceptions.
    """
    if isinstance(exc, RainlevelError):
        return exc

    error_map = {
        FileNotFoundError: DataSourceError,
        IsADirectoryError: DataSourceError,
        PermissionError: DataSourceError,
        UnicodeDecodeError: DataValidationError,
        ValueError: DataValidationError,
        KeyError: DataValidationError,
    }

    for exc_type, rainlevel_exc_type in error_map.items():
        if isinstance(exc, exc_type):
            return rainlevel_exc_type(str(exc), context)

    # Default to generic RainlevelError
    return RainlevelError(str(exc), context)
