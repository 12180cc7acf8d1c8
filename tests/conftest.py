"""Shared fixtures."""

from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger.remove()
    logger.disable("callbuilder")


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Capture callbuilder's loguru records."""
    records: list[dict[str, Any]] = []
    logger.enable("callbuilder")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
