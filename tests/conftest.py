"""Shared fixtures for the directory tests."""

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from orgdirectory.application import DirectoryService
from orgdirectory.infrastructure import InMemoryStorageBackend


class TickingClock:
    """Each call is one second later than the previous one."""

    def __init__(self) -> None:
        self._now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):03d}"


@pytest.fixture()
def backend():
    return InMemoryStorageBackend()


@pytest.fixture()
def service(backend):
    directory = DirectoryService(backend, clock=TickingClock(), id_factory=sequential_ids())
    directory.init()
    return directory


@pytest.fixture()
def acme(service):
    return service.companies.create({"name": "Acme"})


@pytest.fixture()
def globex(service):
    return service.companies.create({"name": "Globex"})
