from __future__ import annotations

import pytest

from src.hrms.hrms.records.service import RecordService
from tests.fakes import FailingStore, RecordingPublisher


@pytest.fixture
def store():
    return FailingStore()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def records(store, publisher):
    return RecordService(store, publisher)
