#!/usr/bin/env python3
"""
Model Implementation Correctness Verification

Checks that every enabled implementation produces identical results: the
same change set at every generation and the same final grid, starting from
one seeded random pattern.

Usage:
    life-verify              # Verify all enabled implementations
    life-verify --verbose    # Show full fingerprints
    life-verify --rows 32 --cols 48 --generations 500
"""

from __future__ import annotations

import argparse
import random
import sys

from loguru import logger

from game_of_life.config import ImplementationConfig, VerifyConfig, load_config
from game_of_life.errors import GameOfLifeError
from game_of_life.logs import setup_logging


def generate_pattern(rows: int, cols: int, seed: int) -> list[int]:
    """Generate deterministic flat test pattern."""
    rng = random.Random(seed)
    return [rng.randint(0, 1) for _ in range(rows * cols)]


class VerificationRunner:
    def __init__(self, settings: VerifyConfig, verbose: bool = False):
        self.settings = settings
        self.verbose = verbose
        self.fingerprints: dict[str, str] = {}
        self.histories: dict[str, list[tuple[set[int], set[int], set[int]]]] = {}

    def verify_impl(self, impl: ImplementationConfig, pattern: list[int]) -> bool:
        """Run one implementation and record its change sets and fingerprint."""
        print(f"Testing {impl.name}...", end="", flush=True)
        s = self.settings
        try:
            model = impl.load()(s.cols, s.rows)
            model.init(pattern)
            history = [model.next().as_sets() for _ in range(s.generations)]
        except GameOfLifeError as e:
            print(f" ✗ FAILED: {e}")
            logger.error(f"{impl.name} failed: {e}")
            return False

        self.histories[impl.name] = history
        self.fingerprints[impl.name] = model.fingerprint()
        if self.verbose:
            print(f"\n   Fingerprint: {model.fingerprint()}")
            print(f"   Alive cells: {model.population()}")
        else:
            print(" ✓")
        logger.debug(f"{impl.name}: {model!r}")
        return True

    def first_divergence(self, name: str, ref_name: str) -> int | None:
        """Generation (1-based) where ``name`` first reports different changes."""
        for generation, (ours, theirs) in enumerate(
            zip(self.histories[name], self.histories[ref_name]), start=1
        ):
            if ours != theirs:
                return generation
        return None

    def compare_all(self) -> bool:
        """Compare all results against the first implementation."""
        if not self.fingerprints:
            print("\n✗ No implementations to compare")
            return False

        print("\n" + "=" * 70)
        print("Correctness Verification Results")
        print("=" * 70)

        ref_name = next(iter(self.fingerprints))
        print(f"\nReference: {ref_name}")
        print(f"  SHA256: {self.fingerprints[ref_name]}")

        print("\nComparison:")
        all_match = True
        for name, fp in self.fingerprints.items():
            if name == ref_name:
                continue
            divergence = self.first_divergence(name, ref_name)
            if fp == self.fingerprints[ref_name] and divergence is None:
                print(f"  ✓ {name:<20} matches reference")
            else:
                all_match = False
                print(f"  ✗ {name:<20} MISMATCH!")
                if divergence is not None:
                    print(f"    First differing change set at generation {divergence}")
                logger.error(f"{name}: results differ from {ref_name}")

        print("\n" + "=" * 70)
        if all_match:
            print("✓ ALL IMPLEMENTATIONS PRODUCE IDENTICAL RESULTS")
        else:
            print("✗ CORRECTNESS VERIFICATION FAILED")
        print("=" * 70)
        return all_match

    def run(self, implementations: list[ImplementationConfig]) -> bool:
        s = self.settings
        print("Model Correctness Verification")
        print(f"Grid size: {s.rows}×{s.cols}")
        print(f"Generations: {s.generations}")
        print(f"Seed: {s.seed}\n")

        pattern = generate_pattern(s.rows, s.cols, s.seed)
        for impl in implementations:
            self.verify_impl(impl, pattern)
        return self.compare_all()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Verify correctness of Model implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed fingerprint information"
    )
    parser.add_argument("--rows", type=int, help="Grid rows (default: verify.rows)")
    parser.add_argument("--cols", type=int, help="Grid columns (default: verify.cols)")
    parser.add_argument("--generations", type=int, help="Number of generations (default: verify.generations)")
    parser.add_argument("--seed", type=int, help="Random seed (default: verify.seed)")
    parser.add_argument("--config", "-c", help="Path to life_config.toml")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config.output.log_level, config.output.log_file)
    except GameOfLifeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    settings = config.verify
    for key in ("rows", "cols", "generations", "seed"):
        value = getattr(args, key)
        if value is not None:
            setattr(settings, key, value)

    runner = VerificationRunner(settings, verbose=args.verbose)
    success = runner.run(config.enabled_implementations())
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
