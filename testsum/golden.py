"""Golden files: compare test output against fixture files on disk."""

import difflib
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field

from testsum.models.base import Model

log = logging.getLogger(__name__)


class GoldenFileError(Exception):
    """Raised when a golden file cannot be read or written."""


class GoldenConfig(Model):
    """Configuration for golden file access."""

    update: bool = Field(
        default=False, description="Rewrite golden files with the actual content"
    )
    directory: Path = Field(
        default=Path("testdata"), description="Directory for relative file names"
    )


@dataclass(frozen=True, kw_only=True)
class GoldenFiles:
    """Accessor for golden files under a configured directory."""

    config: GoldenConfig

    def path(self, filename: str | Path) -> Path:
        """Resolve a golden file name, leaving absolute paths untouched."""
        path = Path(filename)
        if path.is_absolute():
            return path
        return self.config.directory / path

    def get(self, filename: str | Path) -> bytes:
        """Read the content of a golden file.

        Raises:
            GoldenFileError: If the file cannot be read

        """
        path = self.path(filename)
        try:
            return path.read_bytes()
        except OSError as e:
            raise GoldenFileError(f"Cannot read golden file {path}: {e}") from e

    def assert_text(self, actual: str, filename: str | Path) -> bool:
        """Compare text with a golden file, see assert_bytes."""
        return self.assert_bytes(actual.encode("utf-8"), filename)

    def assert_bytes(self, actual: bytes, filename: str | Path) -> bool:
        """Compare bytes with a golden file.

        In update mode the golden file is rewritten with ``actual`` first, so
        the comparison always succeeds. A mismatch is logged as a unified diff.

        Returns:
            True when the golden file matches ``actual``

        Raises:
            GoldenFileError: If the file cannot be read or updated

        """
        if self.config.update:
            self._update(actual, filename)

        expected = self.get(filename)
        if expected == actual:
            return True

        diff = difflib.unified_diff(
            expected.decode("utf-8", "replace").splitlines(keepends=True),
            actual.decode("utf-8", "replace").splitlines(keepends=True),
            fromfile=f"{filename} (expected)",
            tofile=f"{filename} (actual)",
        )
        log.warning("Golden file %s does not match:\n%s", filename, "".join(diff))
        return False

    def _update(self, content: bytes, filename: str | Path) -> None:
        path = self.path(filename)
        log.info("Updating golden file %s", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise GoldenFileError(f"Cannot update golden file {path}: {e}") from e
