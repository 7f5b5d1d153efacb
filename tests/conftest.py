"""
Pytest fixtures for Plant Paradise tests.

Gardens run against in-memory storage, a controllable clock, a seeded RNG and
zero-length reveal delays. Nothing here needs Discord or Red running.
"""

import random

import pytest

from plantparadise.helpers import (
    CatalogHelper,
    DataHelper,
    DEFAULT_DATA_PATH,
    GameStore,
    GardenHelper,
    LoggingHelper,
    MemoryStorage,
    SchedulerHelper,
)
from plantparadise.models import GameSettings


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


@pytest.fixture
def logger():
    return LoggingHelper(None)


@pytest.fixture
def catalog(logger):
    data_loader = DataHelper(DEFAULT_DATA_PATH, logger)
    data_loader.load_all_data()
    return CatalogHelper.from_data_helper(data_loader, logger)


@pytest.fixture
def settings():
    return GameSettings(pack_reveal_delay=0, milestone_check_delay=0)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage, logger, catalog, settings):
    return GameStore(storage, logger, catalog.generator_types, settings)


@pytest.fixture
def scheduler(logger):
    return SchedulerHelper(logger)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def garden(store, catalog, scheduler, logger, settings, clock):
    return GardenHelper(store, catalog, scheduler, logger, settings, rng=random.Random(1234), clock=clock)


@pytest.fixture
def events(garden):
    received = []
    garden.subscribe(received.append)
    return received


def logged_levels(logger: LoggingHelper):
    return [level for _, level in logger.queued_messages]
