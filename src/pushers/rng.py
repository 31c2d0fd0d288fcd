from __future__ import annotations

import random
from typing import Optional, TypeVar

T = TypeVar("T")


class DeterministicRng:
    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_int(self, max_value: int) -> int:
        return self._random.randrange(max_value)

    def take_choice(self, items: list[T]) -> Optional[T]:
        """Remove and return a uniformly chosen element, or None when empty."""
        if not items:
            return None
        return items.pop(self._random.randrange(len(items)))
