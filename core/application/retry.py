"""Retry policy for optimistic-concurrency conflicts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry for fetch-modify-save sequences."""

    max_attempts: int = 3
    backoff_seconds: float = 0.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.backoff_seconds < 0:
            raise ValueError(f"backoff_seconds must be non-negative, got {self.backoff_seconds}")
