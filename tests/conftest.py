import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import sharedlog.log
from sharedlog import LoggingFacility, MemorySink


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SHAREDLOG_CONFIG", raising=False)
    monkeypatch.delenv("cwd", raising=False)


@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def facility(tmp_path, memory_sink):
    fac = LoggingFacility(tmp_path, sinks=[memory_sink])
    yield fac
    fac.close()


@pytest.fixture
def shared_reset(monkeypatch):
    """Fresh process-wide facility for the test, closed afterwards."""
    monkeypatch.setattr(sharedlog.log, "_shared", None)
    monkeypatch.setattr(sharedlog.log, "_shared_error", None)
    yield
    if sharedlog.log._shared is not None:
        sharedlog.log._shared.close()
