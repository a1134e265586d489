"""
Global test configuration and fixtures
"""

import time

import pytest

from codegraph_tiers.compiler import TierCompiler
from codegraph_tiers.config import TierSettings

# Slow test threshold (seconds)
SLOW_TEST_THRESHOLD = 5.0


@pytest.fixture(autouse=True)
def track_test_duration(request):
    """Warn about slow tests"""
    start_time = time.time()

    yield

    duration = time.time() - start_time
    if duration > SLOW_TEST_THRESHOLD:
        print(f"\n⚠️  SLOW TEST ({duration:.2f}s): {request.node.nodeid}")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep CODEGRAPH_TIERS_* variables from the host out of the tests"""
    import os

    for key in list(os.environ):
        if key.startswith("CODEGRAPH_TIERS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> TierSettings:
    return TierSettings(_env_file=None)


@pytest.fixture
def compiler(settings) -> TierCompiler:
    return TierCompiler(settings)


# Pytest hooks
def pytest_collection_modifyitems(config, items):
    """Path-based markers"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
