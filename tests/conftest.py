# conftest.py
from __future__ import annotations

import uuid

import pytest

from exprkit.core.log import (
    _reset_warn_once,
    bind_context,
    configure_from_env,
    enable_logging,
    get_logger,
    log_context,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "expr: expression compiler tests")


@pytest.fixture(scope="session", autouse=True)
def _configure_exprkit_logging():
    # EXPRKIT_LOG_STDERR / EXPRKIT_LOG_LEVEL take precedence; otherwise surface warnings only
    if not configure_from_env():
        enable_logging(level="WARNING")
    bind_context(role="pytest")


@pytest.fixture(scope="session")
def session_run_id():
    return uuid.uuid4().hex[:8]


@pytest.fixture(autouse=True)
def _test_log_context(request, session_run_id):
    log = get_logger("test")
    with log_context(pytest_nodeid=request.node.nodeid, test=request.node.name, test_run=session_run_id):
        log.debug("pytest.test.start", event="pytest.test.start")
        yield


@pytest.fixture(autouse=True)
def _fresh_warn_once():
    """warn_once is per-process; give every test a clean slate."""
    _reset_warn_once()
    yield
    _reset_warn_once()
