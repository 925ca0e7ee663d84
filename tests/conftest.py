"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from loguru import logger

from tests.fakes import Greeter, Notifier


@pytest.fixture(autouse=True)
def quiet_logger() -> Generator[None, None, None]:
    """Keep loguru handlers from leaking between tests."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def greeter(notifier: Notifier) -> Greeter:
    return Greeter(notifier)
