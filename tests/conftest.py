from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("commitpaint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
