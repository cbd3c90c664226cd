import logging

import pytest

from ddm_replicator.io_utils import LOGGER_NAME


class ScriptedRng:
    """Stand-in for numpy Generator that replays fixed increments."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def normal(self, loc, scale):
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def clean_logger():
    """Yield the package logger and strip anything get_logger attached to it."""
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    if hasattr(logger, "_configured"):
        del logger._configured
