from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
import structlog
from norgcapture.plugins import manager as plugin_manager

FIXED_MOMENT = datetime(2024, 3, 5, 9, 15, 0, tzinfo=timezone(timedelta(hours=1)))


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock frozen at 2024-03-05 09:15 (+01:00)."""

    return lambda: FIXED_MOMENT


@pytest.fixture(autouse=True)
def reset_plugin_cache() -> None:
    """Ensure plugin discovery cache is cleared between tests."""

    plugin_manager.reset_plugin_manager_cache()
    yield
    plugin_manager.reset_plugin_manager_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Drop handlers bound to a captured stderr once the test is over."""

    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
