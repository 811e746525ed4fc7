"""Fixtures shared by the whole test suite."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_textlinker_loggers():
    """Drop handlers installed on textlinker loggers during a test."""
    yield
    for name in list(logging.root.manager.loggerDict):
        if name == "textlinker" or name.startswith("textlinker."):
            logger = logging.getLogger(name)
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)
