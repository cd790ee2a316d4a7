from __future__ import annotations

from typing import Callable, Protocol, Sequence


class Counter(Protocol):
    """Instrument that accumulates additive updates."""

    def add(self, delta: float) -> None:
        ...


class Gauge(Protocol):
    """Instrument that holds the most recently set value."""

    def set(self, value: float) -> None:
        ...


class Histogram(Protocol):
    """Instrument that accumulates observations into a distribution."""

    def observe(self, value: float) -> None:
        ...


# Caller-supplied read path: how the instrument exposes its state is the
# caller's business (labels, snapshots, locking), not the harness's.
ValueReader = Callable[[], float]
QuantileReader = Callable[[], Sequence[float]]
BucketReader = Callable[[], Sequence[float]]
