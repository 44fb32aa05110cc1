"""Classify lines of verbose ``go test`` output."""

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

log = logging.getLogger(__name__)

INDENT_WIDTH = 4

RUN_PATTERN = re.compile(r"^=== RUN\s+(?P<name>\S.*?)\s*$")
RESULT_PATTERN = re.compile(
    r"^(?P<indent> *)--- (?P<status>PASS|FAIL|SKIP): "
    r"(?P<name>\S.*?) \((?P<duration>[^)]*)\)\s*$"
)
DURATION_PATTERN = re.compile(r"^(?P<seconds>\d+(?:\.\d+)?)s$")


class LineKind(StrEnum):
    """Kind of a classified line."""

    RUN = "run"
    RESULT = "result"
    PLAIN = "plain"


class Status(StrEnum):
    """Terminal status reported on a result line."""

    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"


@dataclass(frozen=True, kw_only=True)
class ClassifiedLine:
    """One input line with its classification.

    ``depth`` is the nesting level: slash count of the name for RUN lines,
    indentation levels for RESULT lines, zero for PLAIN lines.
    """

    kind: LineKind
    indent: int
    depth: int = 0
    name: str | None = None
    status: Status | None = None
    duration: float | None = None

    @property
    def indented(self) -> bool:
        """Whether the line starts with whitespace."""
        return self.indent > 0


def leading_indent(line: str) -> int:
    """Count leading space and tab characters."""
    return len(line) - len(line.lstrip(" \t"))


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single line, trailing newline optional.

    Never raises: lines that look like markers but do not parse cleanly are
    returned as PLAIN.
    """
    indent = leading_indent(line)
    plain = ClassifiedLine(kind=LineKind.PLAIN, indent=indent)

    if match := RUN_PATTERN.match(line):
        name = match.group("name")
        return ClassifiedLine(
            kind=LineKind.RUN, indent=indent, depth=name.count("/"), name=name
        )

    if match := RESULT_PATTERN.match(line):
        spaces = len(match.group("indent"))
        if spaces % INDENT_WIDTH:
            log.debug("Result line with uneven indentation: %r", line)
            return plain

        duration = DURATION_PATTERN.match(match.group("duration"))
        if duration is None:
            log.debug("Result line with unparsable duration: %r", line)
            return plain

        return ClassifiedLine(
            kind=LineKind.RESULT,
            indent=indent,
            depth=spaces // INDENT_WIDTH,
            name=match.group("name"),
            status=Status(match.group("status")),
            duration=float(duration.group("seconds")),
        )

    return plain
