"""
Batch execution strategies.

A strategy decides how the per-file work of a batch is scheduled. The work
function itself is the same under every strategy, so outputs are identical;
only throughput and resource use differ.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Protocol, TypeVar

import config

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BatchStrategy(Protocol):
    """Interface for scheduling per-item work."""

    name: str

    def map(self, func: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        """Apply func to every item, yielding results as they complete."""


@dataclass
class SequentialStrategy:
    """Process one item at a time in input order."""

    name: str = "sequential"

    def map(self, func: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        for item in items:
            yield func(item)


@dataclass
class ThreadPoolStrategy:
    """Fan items out over a thread pool; results arrive in completion order."""

    workers: int | None = None
    name: str = "parallel"

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def map(self, func: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(func, item) for item in items]
            logger.debug("Submitted %s tasks to thread pool", len(futures))
            for future in as_completed(futures):
                yield future.result()


STRATEGY_NAMES = ("parallel", "sequential")


def get_strategy(name: str | None = None, workers: int | None = None) -> BatchStrategy:
    """Return a batch strategy by name.

    Args:
        name: "parallel" or "sequential". Defaults to config.DEFAULT_BATCH_STRATEGY.
        workers: Thread pool size for the parallel strategy.

    Raises:
        ValueError: If the name is unknown.
    """
    name = name or config.DEFAULT_BATCH_STRATEGY
    if name == "parallel":
        return ThreadPoolStrategy(workers=workers if workers is not None else config.DEFAULT_WORKERS)
    if name == "sequential":
        return SequentialStrategy()
    raise ValueError(f"Unknown batch strategy '{name}'. Expected one of: {', '.join(STRATEGY_NAMES)}")
