"""Models for the outcome of scanning a test run log."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

BANNER = "========"


@dataclass(frozen=True, kw_only=True)
class Failure:
    """A top-level test that reached a FAIL result.

    ``output`` holds the lines printed between the test's RUN line and its
    result line. ``logs`` holds the indented lines reported under the result
    line, nested subtest reports included.
    """

    name: str
    output: str = ""
    logs: str = ""


@dataclass(frozen=True, kw_only=True)
class Summary:
    """Aggregate result of one scan."""

    total: int = 0
    skipped: int = 0
    failures: Sequence[Failure] = field(default_factory=tuple)
    elapsed: float = 0.0

    def format_line(self) -> str:
        """Render the one-line summary banner."""
        parts = [f"{self.total} tests"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failures:
            parts.append(f"{len(self.failures)} failed")
        return (
            f"{BANNER} {', '.join(parts)} "
            f"in {format_seconds(self.elapsed)} seconds {BANNER}"
        )


def format_seconds(seconds: float) -> str:
    """Format seconds with two decimals, rounding half up.

    Rounds from the shortest decimal form of the float, so 3.555 renders as
    "3.56" even though its binary value is slightly below it.
    """
    value = Decimal(repr(float(seconds))).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    return f"{value:.2f}"
