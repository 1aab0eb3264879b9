"""
Pytest configuration and fixtures for trello-client-core tests.
"""

import pytest

from trello_client.core.config import RetryConfig, TrelloClientConfig

TEST_API_KEY = "test-key"
TEST_TOKEN = "test-token"
BASE_URL = "https://api.trello.com/1"

ENV_VARS = (
    "TRELLO_API_KEY",
    "TRELLO_TOKEN",
    "TRELLO_TIMEOUT",
    "TRELLO_RETRIES",
    "TRELLO_VERBOSE_LOGGING",
)


class SleepRecorder:
    """Замена asyncio.sleep: запоминает задержки и не ждёт."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def delays_ms(self):
        return [round(seconds * 1000) for seconds in self.calls]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Окружение разработчика не должно влиять на тесты."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def config():
    """Конфиг с бюджетом в 2 повтора."""
    return TrelloClientConfig(api_key=TEST_API_KEY, token=TEST_TOKEN, retries=2)


@pytest.fixture
def make_config():
    """Фабрика конфигов с тестовыми credentials."""
    def _make(**kwargs):
        kwargs.setdefault("api_key", TEST_API_KEY)
        kwargs.setdefault("token", TEST_TOKEN)
        return TrelloClientConfig(**kwargs)
    return _make


@pytest.fixture
def fast_retry():
    """Backoff без задержек для тестов с реальными таймерами."""
    return RetryConfig(backoff_base_ms=0, backoff_max_ms=0)
