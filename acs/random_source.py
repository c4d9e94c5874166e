from __future__ import annotations
import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1). ``random.Random`` fits."""

    def random(self) -> float: ...


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    return random.Random(seed)
