"""Shared fixtures: a headless host, an engine on it and a seeded RNG."""

import random

import pytest

from cabinet.engine import ArcadeEngine
from cabinet.host import HeadlessHost
from cabinet.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output clean; individual tests may reconfigure."""
    configure_logging(level='WARNING')
    yield
    reset_logging()


@pytest.fixture
def host():
    return HeadlessHost()


@pytest.fixture
def engine(host):
    return ArcadeEngine(host)


@pytest.fixture
def rng():
    return random.Random(1234)
