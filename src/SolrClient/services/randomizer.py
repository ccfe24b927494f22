"""In-place list shuffling used for client-side random ordering."""

from __future__ import annotations

import random
from typing import Any, Optional, Protocol


class ListRandomizer(Protocol):
    """Shuffles a mutable sequence in place."""

    def randomize(self, items: list[Any]) -> None:
        raise NotImplementedError


class ShuffleListRandomizer:
    """`ListRandomizer` backed by `random.Random.shuffle`.

    Args:
        seed: Optional seed for reproducible orderings.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def randomize(self, items: list[Any]) -> None:
        self._random.shuffle(items)
