import sys

import pytest
from loguru import logger

from catenary_cvx.runtime import SolverRuntime


@pytest.fixture
def runtime():
    with SolverRuntime() as rt:
        yield rt


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no CATENARY_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("CATENARY_SOLVER", "CATENARY_SOLVER_VERBOSE"):
        # set first so teardown also drops values a .env file loaded
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


@pytest.fixture
def restore_logging():
    """Put loguru back on the real stderr after a test swaps its handlers."""
    yield
    logger.remove()
    logger.add(sys.__stderr__)
