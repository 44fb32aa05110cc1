"""Fixtures for module tests comparing scan reports with golden files."""

from pathlib import Path

import pytest

from testsum.golden import GoldenConfig, GoldenFiles

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def golden(request: pytest.FixtureRequest) -> GoldenFiles:
    """Golden files under the module testdata directory."""
    config = GoldenConfig(
        update=request.config.getoption("--update-golden"),
        directory=TESTDATA,
    )
    return GoldenFiles(config=config)


@pytest.fixture
def fixed_clock() -> list[int]:
    """Clock readings giving an elapsed time of 1.234 seconds."""
    return [0, 1_234_000_000]
