"""
Pure Python Game of Life model on a toroidal grid.

Cells live in a flat row-major list (index = row * cols + col). Each call
to ``next()`` advances one generation and returns a ``ChangeSet`` listing
the cells that were born, died or survived.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from loguru import logger

from game_of_life.errors import (
    IndexOutOfRange,
    InvalidCellValue,
    InvalidDimension,
    InvalidPatternLength,
)

OFFSETS = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if not (dr == 0 and dc == 0)
)


@dataclass
class ChangeSet:
    """Cells that changed (or stayed alive) during one generation."""

    born: List[int] = field(default_factory=list)
    died: List[int] = field(default_factory=list)
    survived: List[int] = field(default_factory=list)

    @classmethod
    def between(cls, before: Sequence[int], after: Sequence[int]) -> ChangeSet:
        """Derive the change set by diffing two flat states of equal length."""
        if len(before) != len(after):
            raise InvalidPatternLength(
                f"cannot diff states of length {len(before)} and {len(after)}"
            )
        changes = cls()
        for i, (old, new) in enumerate(zip(before, after)):
            if old and new:
                changes.survived.append(i)
            elif old:
                changes.died.append(i)
            elif new:
                changes.born.append(i)
        return changes

    def as_sets(self) -> tuple[set[int], set[int], set[int]]:
        return set(self.born), set(self.died), set(self.survived)

    @property
    def is_empty(self) -> bool:
        """True when nothing was born and nothing died."""
        return not self.born and not self.died


def validate_dimensions(cols: int, rows: int) -> None:
    for name, value in (("cols", cols), ("rows", rows)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")


def validate_pattern(pattern: Iterable[int], size: int) -> List[int]:
    """Return the pattern as a list of ints, or raise without side effects."""
    cells = list(pattern)
    if len(cells) != size:
        raise InvalidPatternLength(f"expected {size} cells, got {len(cells)}")
    for i, value in enumerate(cells):
        if value not in (0, 1):
            raise InvalidCellValue(f"cell {i} must be 0 or 1, got {value!r}")
    return [int(value) for value in cells]


class BaseModel:
    """Dimensions, index checks and rendering shared by every model.

    Subclasses own the cell storage and implement ``init``, ``get``,
    ``next``, ``cells`` and ``population``.
    """

    def __init__(self, cols: int, rows: int):
        validate_dimensions(cols, rows)
        self.cols = cols
        self.rows = rows
        self.generation = 0

    @classmethod
    def random(cls, cols: int, rows: int, seed: int | None = None):
        rng = random.Random(seed)
        model = cls(cols, rows)
        model.init(rng.randint(0, 1) for _ in range(model.size()))
        return model

    def size(self) -> int:
        return self.rows * self.cols

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRange(f"index must be an integer, got {index!r}")
        if not 0 <= index < self.size():
            raise IndexOutOfRange(f"index {index} outside [0, {self.size()})")

    def fingerprint(self) -> str:
        """Return SHA-256 hex digest of the grid as a flat string of 0s and 1s"""
        flat_str = "".join("1" if cell else "0" for cell in self.cells())
        return hashlib.sha256(flat_str.encode("utf-8")).hexdigest()

    def __str__(self) -> str:
        cells = self.cells()
        lines = []
        for r in range(self.rows):
            row = cells[r * self.cols : (r + 1) * self.cols]
            lines.append("".join("█" if cell else "░" for cell in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.rows}×{self.cols}, "
            f"generation={self.generation}, alive={self.population()})"
        )


class Model(BaseModel):
    def __init__(self, cols: int, rows: int):
        super().__init__(cols, rows)
        self._cells = [0] * (rows * cols)
        # Second buffer; swapped with _cells on every generation
        self._next = [0] * (rows * cols)
        self._neighbors = self._neighbor_table()

    def _neighbor_table(self) -> List[tuple[int, ...]]:
        """Flat indices of the 8 wrapped neighbors of every cell."""
        table = []
        for r in range(self.rows):
            for c in range(self.cols):
                table.append(
                    tuple(
                        ((r + dr) % self.rows) * self.cols + (c + dc) % self.cols
                        for dr, dc in OFFSETS
                    )
                )
        return table

    def init(self, pattern: Iterable[int]) -> None:
        """Overwrite every cell from a row-major sequence of 0/1 values."""
        self._cells = validate_pattern(pattern, self.size())
        self.generation = 0
        logger.debug(f"Seeded {self!r}")

    def get(self, index: int) -> int:
        self._check_index(index)
        return self._cells[index]

    def next(self) -> ChangeSet:
        """Advance one generation in place and report what changed."""
        cells = self._cells
        new = self._next
        changes = ChangeSet()
        for i, neighbors in enumerate(self._neighbors):
            count = sum(cells[j] for j in neighbors)
            if cells[i]:
                if count == 2 or count == 3:
                    new[i] = 1
                    changes.survived.append(i)
                else:
                    new[i] = 0
                    changes.died.append(i)
            elif count == 3:
                new[i] = 1
                changes.born.append(i)
            else:
                new[i] = 0
        self._cells, self._next = new, cells
        self.generation += 1
        return changes

    def cells(self) -> List[int]:
        return list(self._cells)

    def population(self) -> int:
        return sum(self._cells)
