#!/usr/bin/env python3
"""
File-driven Game of Life checks.

Each pattern file holds blocks of whitespace-separated 0/1 rows separated by
blank lines. The first block seeds a model; every following block is the
expected grid after one more generation. For each generation the harness
compares the model's change set with the diff of consecutive blocks and the
model's full state with the expected block.

Usage:
    life-harness                        # Check every file in the configured data_dir
    life-harness tests/data/blinker.txt
    life-harness --impl numpy tests/data
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List

from loguru import logger

from game_of_life.config import load_config
from game_of_life.errors import GameOfLifeError, PatternFileError
from game_of_life.logs import setup_logging
from game_of_life.model import ChangeSet

Snapshot = List[List[int]]
ModelFactory = Callable[[int, int], Any]


@dataclass
class FileResult:
    path: Path
    passed: bool
    generations: int = 0
    message: str = ""


def _parse_row(line: str, path: Path, lineno: int) -> List[int]:
    row = []
    for token in line.split():
        if token not in ("0", "1"):
            raise PatternFileError(f"{path}:{lineno}: expected 0 or 1, got {token!r}")
        row.append(int(token))
    return row


def parse_pattern_file(path: str | Path) -> List[Snapshot]:
    """Read the blocks of a pattern file; all blocks must share one shape."""
    path = Path(path)
    blocks: List[Snapshot] = []
    current: Snapshot = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        raise PatternFileError(f"{path}: {e}") from e

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            if current:
                blocks.append(current)
                current = []
            continue
        row = _parse_row(line, path, lineno)
        if current and len(row) != len(current[0]):
            raise PatternFileError(
                f"{path}:{lineno}: row has {len(row)} cells, expected {len(current[0])}"
            )
        current.append(row)
    if current:
        blocks.append(current)

    if len(blocks) < 2:
        raise PatternFileError(f"{path}: need an initial grid and at least one generation")
    shape = (len(blocks[0]), len(blocks[0][0]))
    for n, block in enumerate(blocks[1:], start=1):
        if (len(block), len(block[0])) != shape:
            raise PatternFileError(
                f"{path}: block {n} is {len(block)}×{len(block[0])}, expected {shape[0]}×{shape[1]}"
            )
    return blocks


def flatten(snapshot: Snapshot) -> List[int]:
    return [cell for row in snapshot for cell in row]


def render(cells: List[int], cols: int) -> List[str]:
    return [
        " ".join(str(cell) for cell in cells[i : i + cols])
        for i in range(0, len(cells), cols)
    ]


def _state_diff(expected: List[int], got: List[int], cols: int) -> str:
    width = cols * 2 - 1
    lines = [f"  {'expected':<{width}}   got"]
    for exp_row, got_row in zip(render(expected, cols), render(got, cols)):
        marker = "   " if exp_row == got_row else " ! "
        lines.append(f"  {exp_row}{marker}{got_row}")
    return "\n".join(lines)


def _changes_diff(expected: ChangeSet, got: ChangeSet) -> str:
    lines = []
    for name, exp, actual in zip(("born", "died", "survived"), expected.as_sets(), got.as_sets()):
        if exp != actual:
            lines.append(f"  {name}: expected {sorted(exp)}, got {sorted(actual)}")
    return "\n".join(lines)


def run_file(path: str | Path, factory: ModelFactory) -> FileResult:
    """Check one pattern file, stopping at its first failing generation."""
    path = Path(path)
    try:
        blocks = parse_pattern_file(path)
    except (OSError, PatternFileError) as e:
        logger.error(f"{path}: {e}")
        return FileResult(path, passed=False, message=str(e))

    rows, cols = len(blocks[0]), len(blocks[0][0])
    try:
        model = factory(cols, rows)
        model.init(flatten(blocks[0]))
    except GameOfLifeError as e:
        logger.error(f"{path}: {e}")
        return FileResult(path, passed=False, message=str(e))

    previous = flatten(blocks[0])
    for generation, block in enumerate(blocks[1:], start=1):
        expected = flatten(block)
        got_changes = model.next()
        expected_changes = ChangeSet.between(previous, expected)

        if got_changes.as_sets() != expected_changes.as_sets():
            message = (
                f"generation {generation}: change set mismatch\n"
                + _changes_diff(expected_changes, got_changes)
            )
            logger.debug(f"{path}: {message}")
            return FileResult(path, passed=False, generations=generation - 1, message=message)

        got = [model.get(i) for i in range(model.size())]
        if got != expected:
            message = f"generation {generation}: state mismatch\n" + _state_diff(expected, got, cols)
            logger.debug(f"{path}: {message}")
            return FileResult(path, passed=False, generations=generation - 1, message=message)

        logger.debug(f"{path}: generation {generation} ok")
        previous = expected

    return FileResult(path, passed=True, generations=len(blocks) - 1)


def collect_files(paths: Iterable[str | Path], pattern: str = "*.txt") -> List[Path]:
    files: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            files.extend(sorted(p.glob(pattern)))
        else:
            files.append(p)
    return files


def run_files(paths: Iterable[str | Path], factory: ModelFactory) -> bool:
    """Check every file; returns True when all of them pass."""
    results = []
    for path in paths:
        result = run_file(path, factory)
        results.append(result)
        if result.passed:
            print(f"  ✓ {result.path} ({result.generations} generations)")
        else:
            print(f"  ✗ {result.path}\n{result.message}")

    failed = [r for r in results if not r.passed]
    print(f"\n{len(results) - len(failed)} passed, {len(failed)} failed")
    logger.info(f"Harness finished: {len(results) - len(failed)} passed, {len(failed)} failed")
    return not failed


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Check Game of Life models against pattern files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Pattern files or directories (default: harness.data_dir from config)",
    )
    parser.add_argument("--impl", help="Implementation name from config (default: harness.implementation)")
    parser.add_argument("--config", "-c", help="Path to life_config.toml")
    parser.add_argument("--log-level", help="Log level for stderr (default: output.log_level)")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(args.log_level or config.output.log_level, config.output.log_file)
        impl = config.implementation(args.impl or config.harness.implementation)
        factory = impl.load()
    except GameOfLifeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    files = collect_files(args.paths or [config.harness.data_dir], config.harness.pattern)
    if not files:
        print("Error: no pattern files found", file=sys.stderr)
        sys.exit(2)

    logger.info(f"Checking {len(files)} file(s) with {impl.name}")
    success = run_files(files, factory)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
