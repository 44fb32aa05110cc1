"""Scan verbose test output, passing it through while building a summary."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import IO

from testsum.classifier import ClassifiedLine, LineKind, Status, classify_line
from testsum.models.summary import Failure, Summary

log = logging.getLogger(__name__)

ENCODING = "utf-8"
ERRORS = "surrogateescape"


class ScanError(Exception):
    """Raised when the input stream fails before end of stream."""


class ScanState(Enum):
    """States of the scanner state machine."""

    IDLE = auto()
    RUNNING = auto()
    CAPTURING = auto()


@dataclass(kw_only=True)
class TestContext:
    """Mutable accumulator for one top-level test while it is scanned."""

    __test__ = False

    name: str
    output: list[str] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)

    def to_failure(self) -> Failure:
        """Freeze the accumulated text into a Failure."""
        return Failure(
            name=self.name, output="".join(self.output), logs="".join(self.logs)
        )


@dataclass(kw_only=True)
class Scanner:
    """State machine consuming decoded lines one at a time.

    Transitions are keyed on the current state, the line kind, and whether the
    line sits at depth zero. Only depth-zero tests are counted; everything a
    test prints, including its subtests, is attributed to its top-level test.
    """

    state: ScanState = ScanState.IDLE
    current: TestContext | None = None
    total: int = 0
    skipped: int = 0
    failed: list[TestContext] = field(default_factory=list)

    def feed(self, text: str) -> None:
        """Consume one decoded line, newline included."""
        line = classify_line(text)

        if self.state is ScanState.CAPTURING:
            if line.indented and self.current is not None:
                self.current.logs.append(text)
                return
            self._end_capture()

        match line.kind:
            case LineKind.RUN if line.depth == 0:
                self._start(line.name or "")
            case LineKind.RESULT if line.depth == 0:
                self._finish(line)
            case _:
                self._attribute(text)

    def summary(self, elapsed: float) -> Summary:
        """Build the immutable summary of everything fed so far."""
        return Summary(
            total=self.total,
            skipped=self.skipped,
            failures=tuple(context.to_failure() for context in self.failed),
            elapsed=elapsed,
        )

    def _start(self, name: str) -> None:
        if self.state is ScanState.RUNNING and self.current is not None:
            log.debug("Test %s started before %s finished", name, self.current.name)
        self.current = TestContext(name=name)
        self.state = ScanState.RUNNING

    def _attribute(self, text: str) -> None:
        if self.state is ScanState.RUNNING and self.current is not None:
            self.current.output.append(text)

    def _finish(self, line: ClassifiedLine) -> None:
        name = line.name or ""
        context = self.current if self.state is ScanState.RUNNING else None
        if context is None:
            log.debug("Result for %s without a matching RUN line", name)
            context = TestContext(name=name)
        elif context.name != name:
            log.debug("Result for %s closes open test %s", name, context.name)

        self.total += 1
        if line.status is Status.SKIP:
            self.skipped += 1
        elif line.status is Status.FAIL:
            self.failed.append(context)

        self.current = context
        self.state = ScanState.CAPTURING

    def _end_capture(self) -> None:
        self.current = None
        self.state = ScanState.IDLE


def scan(
    source: IO[bytes],
    out: IO[bytes],
    *,
    clock: Callable[[], int] = time.perf_counter_ns,
) -> Summary:
    """Copy ``source`` to ``out`` line by line and summarize the test run.

    Every input line is written to ``out`` unchanged before it is classified.
    Lines that look like markers but do not parse are treated as plain text.

    Args:
        source: Binary stream of ``go test -v`` output
        out: Binary sink receiving an exact copy of the input
        clock: Nanosecond clock used to measure elapsed time

    Returns:
        Summary with counts, failures, and the wall time spent scanning

    Raises:
        ScanError: If reading from ``source`` fails

    """
    start = clock()
    scanner = Scanner()

    while True:
        try:
            raw = source.readline()
        except OSError as e:
            raise ScanError(f"Failed to read test output: {e}") from e
        if not raw:
            break

        out.write(raw)
        scanner.feed(raw.decode(ENCODING, ERRORS))

    # clock may tick coarser than a trivial scan
    elapsed = max(clock() - start, 1) / 1e9
    summary = scanner.summary(elapsed)
    log.info(
        "Scanned %d tests (%d skipped, %d failed) in %.3fs",
        summary.total,
        summary.skipped,
        len(summary.failures),
        summary.elapsed,
    )
    return summary
