"""
Command line interface.

Reads a profile file, solves the levelling problem and prints the resulting
water and ground levels:

    rainlevel example.toml
    rainlevel profile.yaml --format csv --no-symmetry
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from rainlevel.core.config import RainlevelConfig, get_config
from rainlevel.core.exceptions import (
    ErrorContext, LevellingError, RainlevelError, handle_exception
)
from rainlevel.core.types import FinishingStrategy, OutputFormat
from rainlevel.data.profile import load_profile
from rainlevel.model.solution import Solution
from rainlevel.solutions import solve

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rainlevel",
        description="Equilibrium water levels over a one-dimensional terrain profile",
    )
    parser.add_argument(
        "input", nargs="?", type=Path, default=None,
        help="Profile file (.toml, .yaml, .json); defaults to the configured input",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument(
        "--finishing", choices=[s.value for s in FinishingStrategy], default=None,
        help="Criterion for a range being submerged",
    )
    parser.add_argument(
        "--no-symmetry", action="store_true",
        help="Skip the reversed pass and its averaging",
    )
    parser.add_argument(
        "--parallel", action="store_true",
        help="Run the forward and reversed passes concurrently",
    )
    parser.add_argument(
        "--format", dest="output_format", choices=[f.value for f in OutputFormat], default=None,
        help="Output format",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None,
    )
    return parser


def apply_arguments(config: RainlevelConfig, args: argparse.Namespace) -> RainlevelConfig:
    """Command line arguments override configured values"""
    levelling = config.levelling.model_copy(update={
        key: value for key, value in {
            "finishing": FinishingStrategy(args.finishing) if args.finishing else None,
            "symmetric": False if args.no_symmetry else None,
            "parallel_passes": True if args.parallel else None,
        }.items() if value is not None
    })
    updates = {"levelling": levelling}
    if args.output_format:
        updates["output_format"] = OutputFormat(args.output_format)
    if args.log_level:
        updates["log_level"] = args.log_level
    return config.model_copy(update=updates)


def format_solution(solution: Solution, output_format: OutputFormat) -> str:
    if output_format is OutputFormat.CSV:
        return solution.to_frame().to_csv()
    if output_format is OutputFormat.JSON:
        return json.dumps({
            "levels": solution.levels.tolist(),
            "water_covers": solution.water_covers.tolist(),
            "water_tot": solution.water_tot,
        }, indent=2)
    return "Resulting water and ground levels:\n" + str(solution.to_list())


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = RainlevelConfig.from_yaml(args.config) if args.config else get_config()
    except (OSError, ValueError, yaml.YAMLError, RainlevelError) as e:
        error = handle_exception(
            e, ErrorContext(component="RainlevelConfig", operation="load_config")
        )
        print(f"Configuration cannot be loaded: {error}", file=sys.stderr)
        return 1
    config = apply_arguments(config, args)

    logging.basicConfig(level=getattr(logging, config.log_level), format=config.log_format)

    input_path = args.input or config.default_input
    try:
        problem = load_profile(input_path).to_problem()
    except RainlevelError as e:
        print(f"Input cannot be used: {e}", file=sys.stderr)
        return 1

    try:
        solution = solve(problem, config)
    except LevellingError as e:
        logger.error(f"Levelling failed for {input_path}: {e}")
        print(f"Levelling failed: {e}", file=sys.stderr)
        return 2

    print(format_solution(solution, config.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
