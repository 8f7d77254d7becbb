"""Metrics tracking for homomorphic operations in a matching run."""

import time
from collections import defaultdict


class OperationMetrics:
    """Collects per-operation counts and wall-clock time of a matching run."""

    def __init__(self):
        self.start_time = None
        self.end_time = None
        self.by_type: dict[str, int] = defaultdict(int)

    def start(self):
        self.start_time = time.time()
        self.end_time = None

    def stop(self):
        self.end_time = time.time()

    def record(self, op: str, count: int = 1):
        self.by_type[op] += count

    def count(self, op: str) -> int:
        return self.by_type.get(op, 0)

    @property
    def total(self) -> int:
        return sum(self.by_type.values())

    @property
    def elapsed(self):
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time else time.time()
        return end - self.start_time

    def reset(self):
        self.start_time = None
        self.end_time = None
        self.by_type.clear()
