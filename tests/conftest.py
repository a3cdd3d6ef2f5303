import logging
from logging.handlers import RotatingFileHandler

import numpy as np
import pytest


class ScriptedRng:
    """
    Stand-in random source that replays fixed values.

    ``uniform(low, high)`` maps the next scripted fraction f in [0, 1] to
    ``low + f * (high - low)``; ``integers(low, high)`` returns the next
    scripted integer.
    """

    def __init__(self, fractions=(), ints=()):
        self.fractions = list(fractions)
        self.ints = list(ints)
        self.calls = 0

    def uniform(self, low=0.0, high=1.0):
        self.calls += 1
        f = self.fractions.pop(0) if self.fractions else 0.5
        return low + f * (high - low)

    def integers(self, low, high=None):
        self.calls += 1
        value = self.ints.pop(0) if self.ints else low
        return value


class ForbiddenRng:
    """Fails the test if any random number is drawn"""

    def uniform(self, *args, **kwargs):
        raise AssertionError("unexpected random draw")

    integers = uniform


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def forbidden_rng():
    return ForbiddenRng()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop the console and file handlers setup_logging installs on the root logger"""
    root = logging.getLogger()
    before, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before and type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
