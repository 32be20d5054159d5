"""Pytest configuration and shared fixtures for all tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

# Fixed "now" for every test that depends on EOL dates
FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

# Shape of https://endoflife.date/api/python.json, newest cycle first.
# Relative to FIXED_NOW, 3.9 and older are EOL.
SAMPLE_FEED = [
    {
        "cycle": "3.14",
        "releaseDate": "2025-10-07",
        "eol": "2030-10-31",
        "latest": "3.14.0",
        "latestReleaseDate": "2025-10-07",
        "lts": False,
        "support": "2027-10-01",
    },
    {
        "cycle": "3.13",
        "releaseDate": "2024-10-07",
        "eol": "2029-10-31",
        "latest": "3.13.8",
        "latestReleaseDate": "2025-10-07",
        "lts": False,
        "support": "2026-10-01",
    },
    {
        "cycle": "3.12",
        "releaseDate": "2023-10-02",
        "eol": "2028-10-31",
        "latest": "3.12.11",
        "latestReleaseDate": "2025-06-03",
        "lts": False,
        "support": "2025-04-02",
    },
    {
        "cycle": "3.11",
        "releaseDate": "2022-10-24",
        "eol": "2027-10-31",
        "latest": "3.11.13",
        "latestReleaseDate": "2025-06-03",
        "lts": False,
        "support": "2024-04-01",
    },
    {
        "cycle": "3.10",
        "releaseDate": "2021-10-04",
        "eol": "2026-10-31",
        "latest": "3.10.18",
        "latestReleaseDate": "2025-06-03",
        "lts": False,
        "support": "2023-04-05",
    },
    {
        "cycle": "3.9",
        "releaseDate": "2020-10-05",
        "eol": "2025-10-31",
        "latest": "3.9.23",
        "latestReleaseDate": "2025-06-03",
        "lts": False,
        "support": "2022-05-17",
    },
    {
        "cycle": "3.8",
        "releaseDate": "2019-10-14",
        "eol": "2024-10-07",
        "latest": "3.8.20",
        "latestReleaseDate": "2024-09-06",
        "lts": False,
        "support": "2021-05-03",
    },
    {
        "cycle": "3.7",
        "releaseDate": "2018-06-27",
        "eol": "2023-06-27",
        "latest": "3.7.17",
        "latestReleaseDate": "2023-06-06",
        "lts": False,
        "support": "2020-06-27",
    },
]


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class RecordingSleep:
    """Stand-in for time.sleep that records the requested delays."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_response(status_code=200, payload=None, reason="OK", json_error=False):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if json_error:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CI variables of the machine running the tests out of every test."""
    for name in (
        "REQUIRES_PYTHON",
        "EOL_API_URL",
        "EOL_TIMEOUT",
        "EOL_MAX_RETRIES",
        "OFFLINE",
        "OUTPUT_FORMAT",
        "LOG_LEVEL",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def sample_feed():
    return [dict(item) for item in SAMPLE_FEED]


@pytest.fixture
def mock_session(sample_feed):
    """Session whose GET returns the sample feed."""
    session = Mock()
    session.get.return_value = make_response(payload=sample_feed)
    return session
