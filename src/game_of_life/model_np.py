from __future__ import annotations

from typing import Iterable, List

import numpy as np
from loguru import logger

from game_of_life.model import BaseModel, ChangeSet, validate_pattern


class ModelNP(BaseModel):
    """NumPy-backed model; same interface and results as ``Model``."""

    def __init__(self, cols: int, rows: int):
        super().__init__(cols, rows)
        self.data = np.zeros(self.size(), dtype=np.uint8)

    def init(self, pattern: Iterable[int]) -> None:
        self.data = np.array(validate_pattern(pattern, self.size()), dtype=np.uint8)
        self.generation = 0
        logger.debug(f"Seeded {self!r}")

    def get(self, index: int) -> int:
        self._check_index(index)
        return int(self.data[index])

    def next(self) -> ChangeSet:
        grid = self.data.reshape(self.rows, self.cols)
        # Correct wrap-around using np.roll
        neighbors = sum(
            np.roll(np.roll(grid, dr, 0), dc, 1)
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if not (dr == 0 and dc == 0)
        )
        alive = grid == 1
        new_state = alive & ((neighbors == 2) | (neighbors == 3)) | ~alive & (neighbors == 3)

        old, new = alive.ravel(), new_state.ravel()
        changes = ChangeSet(
            born=np.flatnonzero(~old & new).tolist(),
            died=np.flatnonzero(old & ~new).tolist(),
            survived=np.flatnonzero(old & new).tolist(),
        )
        self.data = new.astype(np.uint8)
        self.generation += 1
        return changes

    def cells(self) -> List[int]:
        return self.data.tolist()

    def population(self) -> int:
        return int(self.data.sum())
