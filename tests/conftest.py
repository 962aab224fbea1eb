import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from settings import DIFFICULTIES
from stats_store import StatsStore


class FakeScheduler:
    """Stands in for a tk root; callbacks only run when ``advance`` is called."""

    def __init__(self):
        self.jobs = {}
        self.next_id = 0
        self.cancelled = []

    def after(self, ms, callback):
        self.next_id += 1
        job = f"after#{self.next_id}"
        self.jobs[job] = callback
        return job

    def after_cancel(self, job):
        self.cancelled.append(job)
        self.jobs.pop(job, None)

    def advance(self, ticks=1):
        for _ in range(ticks):
            pending = list(self.jobs.items())
            self.jobs.clear()
            for _job, callback in pending:
                callback()

    @property
    def pending(self):
        return len(self.jobs)


class MemoryStorage:
    def __init__(self, items=None):
        self.items = dict(items or {})

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value


class FailingStorage(MemoryStorage):
    def get_item(self, key):
        raise OSError("storage disabled")

    def set_item(self, key, value):
        raise OSError("quota exceeded")


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def stats(storage):
    return StatsStore(storage, DIFFICULTIES.keys())


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
