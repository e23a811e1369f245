import os
import time

import pytest

from tests.helpers import NOW

# US Eastern rules as a POSIX TZ string, so no zoneinfo database is needed.
EASTERN_TZ_RULE = "EST5EDT,M3.2.0,M11.1.0"


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/data
    monkeypatch.setenv("HOME", str(home))
    for var in ("LEETSRS_DATA_FILE", "LEETSRS_INTERVAL_POLICY", "LEETSRS_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def eastern_local_time():
    """Switch the process-local timezone to US Eastern for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    previous = os.environ.get("TZ")
    os.environ["TZ"] = EASTERN_TZ_RULE
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()
