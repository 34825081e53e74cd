"""Tests for the logging setup."""

from __future__ import annotations

import structlog
from norgcapture.utils.log import setup_logging


def test_verbose_logging_goes_to_stderr(capsys) -> None:
    setup_logging(verbose=True)

    structlog.get_logger("norgcapture.tests").debug("Planned capture", line=4)

    captured = capsys.readouterr()
    assert "Planned capture" in captured.err
    assert "line=4" in captured.err
    assert captured.out == ""


def test_default_logging_hides_debug(capsys) -> None:
    setup_logging()

    log = structlog.get_logger("norgcapture.tests")
    log.debug("hidden")
    log.warning("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err
