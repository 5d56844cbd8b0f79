from __future__ import annotations

import hashlib
import random
from typing import Any, Iterable, Sequence

from ringside.contracts import RandomSource
from ringside.core.errors import RandomSourceExhaustedError, ScriptMismatchError


class PythonRandomSource(RandomSource):
    """Injected randomness source for gameplay and test determinism."""

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    def rand(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        return self._rng.choice(items)

    def shuffle(self, items: list[Any]) -> None:
        self._rng.shuffle(items)

    def spawn(self, substream_id: str) -> RandomSource:
        seed = self._seed
        if seed is None:
            return PythonRandomSource(seed=None)
        digest = hashlib.sha256(f"{seed}:{substream_id}".encode("ascii", "ignore")).hexdigest()
        child_seed = int(digest[:16], 16)
        return PythonRandomSource(seed=child_seed)


class ScriptedRandomSource(RandomSource):
    """Pre-programmed draw sequence.

    Each ``rand`` consumes one float in ``[0, 1)`` and each ``randint`` one
    integer inside the requested bounds. Running out of values, or a value
    that does not fit the request, fails loudly. Spawned substreams share the
    parent script so draws stay in one global order.
    """

    def __init__(self, values: Iterable[float | int]) -> None:
        self._values = list(values)
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._cursor

    def rand(self) -> float:
        value = self._next("rand()")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value < 1.0:
            raise ScriptMismatchError(f"draw #{self._cursor} for rand() must be in [0, 1), got {value!r}")
        return float(value)

    def randint(self, a: int, b: int) -> int:
        value = self._next(f"randint({a}, {b})")
        if not isinstance(value, int) or isinstance(value, bool) or not a <= value <= b:
            raise ScriptMismatchError(f"draw #{self._cursor} for randint({a}, {b}) out of range, got {value!r}")
        return value

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        return items[self.randint(0, len(items) - 1)]

    def shuffle(self, items: list[Any]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def spawn(self, substream_id: str) -> RandomSource:
        return self

    def _next(self, request: str) -> float | int:
        if self._cursor >= len(self._values):
            raise RandomSourceExhaustedError(
                f"scripted random source exhausted after {len(self._values)} draws (requested {request})"
            )
        value = self._values[self._cursor]
        self._cursor += 1
        return value


class RecordingRandomSource(RandomSource):
    """Wraps a source and keeps every draw so it can be replayed with ScriptedRandomSource."""

    def __init__(self, inner: RandomSource, draws: list[float | int] | None = None) -> None:
        self._inner = inner
        self.draws: list[float | int] = draws if draws is not None else []

    def rand(self) -> float:
        value = self._inner.rand()
        self.draws.append(value)
        return value

    def randint(self, a: int, b: int) -> int:
        value = self._inner.randint(a, b)
        self.draws.append(value)
        return value

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        return items[self.randint(0, len(items) - 1)]

    def shuffle(self, items: list[Any]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def spawn(self, substream_id: str) -> RandomSource:
        return RecordingRandomSource(self._inner.spawn(substream_id), draws=self.draws)

    def replay(self) -> ScriptedRandomSource:
        return ScriptedRandomSource(self.draws)


def gameplay_random() -> PythonRandomSource:
    return PythonRandomSource(seed=None)


def seeded_random(seed: int) -> PythonRandomSource:
    return PythonRandomSource(seed=seed)
