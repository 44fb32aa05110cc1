"""Shared pytest options."""

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the golden file update option."""
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Rewrite golden files with the actual output",
    )
