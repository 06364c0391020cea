"""Simple micro-benchmark of Model.next() across implementations.

Run with something like:

    uv run benchmarks/bench_model.py

Implementations come from life_config.toml (or the built-in defaults).
This is intentionally minimal and not a rigorous benchmark suite.
"""

from __future__ import annotations

import time

from loguru import logger

from game_of_life.config import load_config
from game_of_life.logs import setup_logging
from game_of_life.verify import generate_pattern

WARMUP = 5


def bench(label: str, cls, rows: int, cols: int, generations: int, pattern: list[int]) -> float:
    model = cls(cols, rows)
    model.init(pattern)
    for _ in range(WARMUP):
        model.next()

    start = time.perf_counter()
    for _ in range(generations):
        model.next()
    duration = time.perf_counter() - start
    logger.debug(f"{label}: {model!r}")
    return duration


def main() -> None:
    config = load_config()
    setup_logging(config.output.log_level, config.output.log_file)
    s = config.verify
    pattern = generate_pattern(s.rows, s.cols, s.seed)

    print(f"{s.rows}×{s.cols} grid, {s.generations} generations, seed={s.seed}")
    baseline = None
    for impl in config.enabled_implementations():
        duration = bench(impl.name, impl.load(), s.rows, s.cols, s.generations, pattern)
        baseline = baseline or duration
        print(f"{impl.name:24s} {duration:8.4f}s  {baseline / duration:6.2f}×  {impl.description}")


if __name__ == "__main__":  # pragma: no cover
    main()
