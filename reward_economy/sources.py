"""
Reward Economy - Randomness & IDs
=================================
Injectable random and unique-ID streams.

Every roll in the engine goes through a RandomSource passed in by the
caller, so a seed (or a scripted list of draws) fully determines the
outcome. Nothing here touches the global ``random`` module state.

Core Classes:
- RandomSource: protocol, ``random() -> float`` in [0, 1)
- SeededRandom: reproducible stream backed by ``random.Random``
- ScriptedRandom: replays a fixed list of draws, for tests
"""

import itertools
import random
import uuid
from typing import Callable, Iterable, List, Protocol, Sequence, TypeVar


T = TypeVar("T")

IdProvider = Callable[[], str]


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


class SeededRandom:
    """Reproducible random stream. Same seed, same draws."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"


class ScriptedRandom:
    """
    Replays a fixed sequence of draws.

    Raises RuntimeError once the script runs out so a test notices when the
    code under test draws more often than expected.
    """

    def __init__(self, values: Iterable[float]):
        self._values: List[float] = list(values)
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"scripted draw {value} is outside [0, 1)")
        self._index = 0

    def random(self) -> float:
        if self._index >= len(self._values):
            raise RuntimeError(
                f"ScriptedRandom exhausted after {len(self._values)} draws"
            )
        value = self._values[self._index]
        self._index += 1
        return value

    @property
    def draws_used(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index


# =============================================================================
# DRAW HELPERS
# =============================================================================

def uniform(rng: RandomSource, low: float, high: float) -> float:
    """Uniform float in [low, high)."""
    return low + rng.random() * (high - low)


def randint(rng: RandomSource, a: int, b: int) -> int:
    """Uniform integer in a..b inclusive, one draw."""
    span = b - a + 1
    return a + int(rng.random() * span)


def choice(rng: RandomSource, options: Sequence[T]) -> T:
    """Pick one element uniformly, one draw."""
    if not options:
        raise IndexError("cannot choose from an empty sequence")
    return options[int(rng.random() * len(options))]


def chance(rng: RandomSource, probability: float) -> bool:
    """Bernoulli trial: True with the given probability."""
    return rng.random() < probability


# =============================================================================
# ID PROVIDERS
# =============================================================================

def uuid_provider() -> str:
    """Random globally unique id."""
    return uuid.uuid4().hex


def sequential_ids(prefix: str = "id") -> IdProvider:
    """Deterministic ids: ``prefix_1``, ``prefix_2``, ..."""
    counter = itertools.count(1)

    def next_id() -> str:
        return f"{prefix}_{next(counter)}"

    return next_id
