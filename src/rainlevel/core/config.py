"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.
"""
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import Field, model_validator, ConfigDict
from pydantic_settings import BaseSettings

from rainlevel.core.constants import (
    DEFAULT_INPUT_FILE,
    SOLVER_BOOST,
    SOLVER_DAMPING,
    SOLVER_MAX_ITERATIONS,
    SOLVER_MAX_STEP,
    SOLVER_MIN_STEP,
    SOLVER_TOLERANCE,
)
from rainlevel.core.exceptions import ConfigurationError
from rainlevel.core.types import FinishingStrategy, OutputFormat


class SolverConfig(BaseSettings):
    """Configuration for the adaptive-step iterative solver"""

    tolerance: float = Field(SOLVER_TOLERANCE, gt=0, description="Residual accepted as zero")
    min_step: float = Field(SOLVER_MIN_STEP, gt=0, description="Smallest step in x")
    max_step: float = Field(SOLVER_MAX_STEP, gt=0, description="Largest step in x")

    # keep this low, if the solver cannot finish in about a hundred
    # iterations more will not help
    max_iterations: int = Field(SOLVER_MAX_ITERATIONS, gt=0, description="Iteration cap")

    # higher = faster approach, lower = safer convergence
    boost: float = Field(SOLVER_BOOST, gt=0, description="Step size per unit of residual")

    # fraction of a step used when lowering x, avoids wobble around the root
    damping: float = Field(SOLVER_DAMPING, gt=0, le=1, description="Asymmetric step damping")

    model_config = ConfigDict(env_prefix="RAINLEVEL_SOLVER_", case_sensitive=False)

    @model_validator(mode="after")
    def validate_steps(self):
        """Cross-field validation"""
        if self.min_step > self.max_step:
            raise ValueError(
                f"min_step ({self.min_step}) must not exceed max_step ({self.max_step})"
            )
        return self

    @property
    def lowering_factor(self) -> float:
        """Fraction of a step applied when the residual is positive"""
        return self.damping / self.boost


class LevellingConfig(BaseSettings):
    """Configuration for the recursive levelling algorithm"""

    finishing: FinishingStrategy = Field(
        FinishingStrategy.VOLUME,
        description="Criterion for a range being submerged"
    )

    # Initial lift guess: factor * (water / length) - peak height
    initial_guess_factor: float = Field(1.0, gt=0, le=1)

    # Symmetry averaging
    symmetric: bool = Field(True, description="Average forward and reversed passes")
    parallel_passes: bool = Field(False, description="Run both passes on a thread pool")

    # Runtime checks
    check_conservation: bool = Field(True, description="Verify water conservation of results")

    model_config = ConfigDict(env_prefix="RAINLEVEL_LEVELLING_", case_sensitive=False)


class RainlevelConfig(BaseSettings):
    """Main configuration for the rainlevel package"""

    project_name: str = "rainlevel"

    # Component configurations
    solver: SolverConfig = Field(default_factory=SolverConfig)
    levelling: LevellingConfig = Field(default_factory=LevellingConfig)

    # Input / output
    default_input: Path = Field(Path(DEFAULT_INPUT_FILE))
    output_format: OutputFormat = OutputFormat.LIST

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = ConfigDict(
        env_prefix="RAINLEVEL_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "RainlevelConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file must hold a mapping: {yaml_path}")

        return cls(**yaml_config)

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)


# Global configuration instance
_config: Optional[RainlevelConfig] = None


def get_config(config_path: Optional[Path] = None) -> RainlevelConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and config_path.exists():
            _config = RainlevelConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = RainlevelConfig()

    return _config


def set_config(config: RainlevelConfig):
    """Set configuration (useful for testing)"""
    global _config
    _config = config


def reset_config():
    """Drop the cached configuration"""
    global _config
    _config = None
