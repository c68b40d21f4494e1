import os
import tempfile
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from dealcommand.api.server import create_app
from dealcommand.config import AppConfig, DatabaseConfig
from dealcommand.db.repository import Repository


class FakeClock:
    """Settable stand-in for datetime.utcnow."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield f"sqlite:///{path}"
    os.unlink(path)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 14, 9, 30))


@pytest.fixture
def repo(db_url, clock):
    return Repository(db_url, clock=clock)


@pytest.fixture
def client(db_url):
    # Built directly so no delivery credentials leak in from the environment
    cfg = AppConfig(database=DatabaseConfig(url=db_url))
    return TestClient(create_app(cfg))
