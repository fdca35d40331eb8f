"""Pincel ScanAccumulator — opt-in profiling for tokenizing.

This module provides accumulated metrics during scanning:
- Total profiling time
- Source length and token count of top-level runs
- Number of delegated (nested) runs
- Number of stalls (error tokens in lenient mode, or the fatal one)

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from pincel import tokenize
    from pincel.profiling import profiled_scan

    with profiled_scan() as metrics:
        list(tokenize("public static void run() {", "java"))

    print(metrics.summary())
    # {"total_ms": 0.4, "runs": 1, "source_length": 26, "token_count": 11, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics during scanning.

    Attributes:
        start_time: Profiling start timestamp.
        runs: Number of completed top-level runs.
        source_length: Total length of sources scanned by top-level runs.
        token_count: Tokens emitted by top-level runs (nested tokens included).
        delegations: Nested runs started by delegation.
        stalls: Positions where no rule matched.

    """

    start_time: float = field(default_factory=perf_counter)
    runs: int = 0
    source_length: int = 0
    token_count: int = 0
    delegations: int = 0
    stalls: int = 0

    def record_scan(self, source_length: int, token_count: int) -> None:
        """Record a completed top-level run."""
        self.runs += 1
        self.source_length += source_length
        self.token_count += token_count

    def record_delegation(self) -> None:
        self.delegations += 1

    def record_stall(self) -> None:
        self.stalls += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "runs": self.runs,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "delegations": self.delegations,
            "stalls": self.stalls,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated during scans.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
