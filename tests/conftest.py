import pytest

_ENV_VARS = (
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "APP_DEBUG",
    "DB_BACKEND",
    "DATABASE_URL",
    "SERVER_HOST",
    "SERVER_PORT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
