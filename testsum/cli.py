"""CLI entry point: pipe ``go test -v`` output and summarize it."""

import argparse
import logging
import sys
from typing import IO

from testsum.models.summary import Summary
from testsum.scan import ScanError, scan

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_SCAN_ERROR = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def format_report(summary: Summary) -> str:
    """Format failures followed by the summary banner."""
    sections: list[str] = []
    for failure in summary.failures:
        sections.append(f"=== FAIL: {failure.name}\n{failure.output}{failure.logs}")
    sections.append(summary.format_line() + "\n")
    return "\n".join(sections)


def run(source: IO[bytes], out: IO[bytes]) -> int:
    """Scan ``source`` into ``out``, append the report and return exit code."""
    log = logging.getLogger("testsum")

    try:
        summary = scan(source, out)
    except ScanError as e:
        log.error("%s", e)
        return EXIT_SCAN_ERROR

    out.write(b"\n" + format_report(summary).encode("utf-8", "surrogateescape"))
    out.flush()

    return EXIT_FAILURES if summary.failures else EXIT_OK


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pass go test -v output through and print a summary"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics written to stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(run(sys.stdin.buffer, sys.stdout.buffer))


if __name__ == "__main__":  # pragma: no cover
    main()
