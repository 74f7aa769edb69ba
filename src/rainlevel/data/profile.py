"""
Input profiles: data contract and file readers.

A profile file provides the rain duration and the column heights:

    duration = 5
    profile = [ 3, 4, 0 ]

TOML, YAML and JSON files are accepted.
"""
import json
import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rainlevel.core.constants import SUPPORTED_INPUT_SUFFIXES
from rainlevel.core.exceptions import (
    DataSourceError, DataValidationError, ErrorContext
)
from rainlevel.model.problem import Problem

logger = logging.getLogger(__name__)


class ProfileData(BaseModel):
    """Rain duration and terrain profile as read from a file"""
    duration: int = Field(ge=0, description="Rain duration, one unit of water per column and step")
    profile: List[Annotated[int, Field(ge=0)]] = Field(
        min_length=1, description="Column heights, left to right"
    )

    model_config = ConfigDict(extra="forbid", strict=True)

    def to_problem(self) -> Problem:
        """Pre-process data into a problem description"""
        return Problem.from_profile(self.duration, self.profile)


def _parse_toml(text: str) -> Dict[str, Any]:
    return tomllib.loads(text)


def _parse_yaml(text: str) -> Dict[str, Any]:
    return yaml.safe_load(text)


def _parse_json(text: str) -> Dict[str, Any]:
    return json.loads(text)


PARSERS = {
    ".toml": _parse_toml,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}


def parse_profile(text: str, suffix: str = ".toml") -> ProfileData:
    """
    Deserialize profile content.

    Raises:
        DataValidationError: unknown format, unparsable content or
            content violating the data contract
    """
    context = ErrorContext(component="ProfileData", operation="parse_profile")
    suffix = suffix.lower()
    if suffix not in PARSERS:
        raise DataValidationError(
            f"Unsupported input format '{suffix}', expected one of {SUPPORTED_INPUT_SUFFIXES}",
            context,
        )

    try:
        raw = PARSERS[suffix](text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise DataValidationError(f"Input cannot be parsed: {e}", context) from e

    if not isinstance(raw, dict):
        raise DataValidationError("Input must be a mapping with 'duration' and 'profile'", context)

    try:
        return ProfileData(**raw)
    except ValidationError as e:
        raise DataValidationError(f"Invalid profile: {e}", context) from e


def load_profile(path: Union[str, Path]) -> ProfileData:
    """
    Read a profile file.

    Raises:
        DataSourceError: if the file cannot be read
        DataValidationError: if its content is not a valid profile
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataSourceError(
            f"Input file not found: {path} ({e})",
            ErrorContext(component="ProfileData", operation="load_profile", details={"path": str(path)}),
        ) from e
    except UnicodeDecodeError as e:
        raise DataValidationError(
            f"Input file is not UTF-8 text: {path}",
            ErrorContext(component="ProfileData", operation="load_profile", details={"path": str(path)}),
        ) from e

    data = parse_profile(text, path.suffix)
    logger.info(f"Loaded {len(data.profile)} columns, duration {data.duration} from {path}")
    return data
