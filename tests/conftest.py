from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from gojagen.imports import ImportResolver
from tests._fixtures.package_builder import GoPackageBuilder


@pytest.fixture
def package_builder(tmp_path: Path) -> GoPackageBuilder:
    """Provide a Go package builder rooted at the pytest tmp_path."""
    return GoPackageBuilder(tmp_path)


@pytest.fixture
def resolver() -> ImportResolver:
    """Resolver seeded the way a run for ``example.com/lib/widget`` seeds it."""
    return ImportResolver(
        ["example.com/lib/widget", "github.com/dop251/goja"],
        package_name="widget",
        package_path="example.com/lib/widget",
    )


@pytest.fixture(autouse=True)
def _reset_gojagen_logger() -> Iterator[None]:
    """Drop handlers the CLI installs so later tests do not log into closed streams."""
    yield
    logger = logging.getLogger("gojagen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
