#!/usr/bin/env python

from __future__ import annotations

import argparse
import sys

import numpy as np
import pandas as pd

from rainlevel.core.config import LevellingConfig, SolverConfig
from rainlevel.core.exceptions import LevellingError
from rainlevel.core.types import FinishingStrategy
from rainlevel.levelling.symmetry import SymmetryAverager


def check_profile(averager: SymmetryAverager, grounds: np.ndarray, water: float) -> dict:
    try:
        forward, backward = averager.passes(grounds, water)
    except LevellingError as e:
        return {"status": type(e).__name__, "deviation": np.nan, "balance_error": np.nan}

    levels = (forward + backward) / 2.0
    return {
        "status": "OK",
        "deviation": float(np.max(np.abs(forward - backward))),
        "balance_error": float(np.sum(levels - grounds) - water),
    }


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Level random profiles and compare forward and reversed passes")
    parser.add_argument("--profiles", type=int, default=200)
    parser.add_argument("--columns", type=int, default=12)
    parser.add_argument("--max-height", type=int, default=9)
    parser.add_argument("--max-duration", type=int, default=4)
    parser.add_argument("--finishing", choices=[s.value for s in FinishingStrategy],
                        default=FinishingStrategy.VOLUME.value)
    parser.add_argument("--tolerance", type=float, default=1e-9,
                        help="Deviation above which passes count as disagreeing")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", default="", help="Optional CSV path for per-profile results")

    args = parser.parse_args(argv)

    rng = np.random.default_rng(args.seed)
    averager = SymmetryAverager(
        LevellingConfig(finishing=FinishingStrategy(args.finishing)), SolverConfig())

    rows = []
    for i in range(args.profiles):
        grounds = rng.integers(0, args.max_height + 1, size=args.columns).astype(float)
        duration = int(rng.integers(1, args.max_duration + 1))
        water = float(duration * args.columns)
        # trivial problems never reach the recursor
        if water >= args.columns * grounds.max() - grounds.sum() or grounds.max() == grounds.min():
            continue

        rows.append({
            "profile": " ".join(str(int(g)) for g in grounds),
            "duration": duration,
            **check_profile(averager, grounds, water),
        })

    df = pd.DataFrame(rows)
    if df.empty:
        print("No general problems generated")
        return 1

    disagreeing = df[df["deviation"] > args.tolerance]
    print("=" * 60)
    print("FORWARD / REVERSED PASS COMPARISON")
    print("=" * 60)
    print(f"Profiles levelled:     {len(df)}")
    print(f"Failures:              {(df['status'] != 'OK').sum()}")
    print(f"Disagreeing passes:    {len(disagreeing)}")
    print(f"Max deviation:         {df['deviation'].max():.6g}")
    print(f"Max balance error:     {df['balance_error'].abs().max():.3e}")

    if len(disagreeing):
        print()
        print("Largest deviations:")
        for _, row in disagreeing.nlargest(5, "deviation").iterrows():
            print(f"  [{row['profile']}] x{row['duration']}: {row['deviation']:.4g}")

    if args.out:
        df.to_csv(args.out, index=False)
        print(f"\nResults written to {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
