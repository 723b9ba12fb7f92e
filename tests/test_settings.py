import pytest

from cart.services.errors import ConfigurationError
from cart.settings import load_settings, parse_overrides


def test_defaults_publish_documentation_metadata() -> None:
    settings = load_settings()

    assert settings.app_name == "Cart Restful Web Service"
    assert settings.app_version == "v1"
    assert settings.app_description == "Cart Restful Web Service documentation"
    assert settings.debug is False
    assert settings.db_backend == "memory"
    assert settings.database_url is None
    assert settings.port == 8080


def test_parse_overrides_ignores_positional_arguments() -> None:
    overrides = parse_overrides(["serve", "--server.port=9000", "--app.debug", "-x"])

    assert overrides == {"server.port": "9000", "app.debug": "true"}


def test_parse_overrides_keeps_equals_in_value() -> None:
    overrides = parse_overrides(["--db.url=sqlite:///cart.db?mode=rw"])

    assert overrides == {"db.url": "sqlite:///cart.db?mode=rw"}


@pytest.mark.parametrize("arg", ["--", "--=value", "--unknown.key=1"])
def test_parse_overrides_rejects_bad_keys(arg: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_overrides([arg])


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVER_PORT", "7000")
    monkeypatch.setenv("APP_NAME", "from-env")

    settings = load_settings({"server.port": "9000"})

    assert settings.port == 9000
    assert settings.app_name == "from-env"


@pytest.mark.parametrize(
    "overrides",
    [
        {"server.port": "abc"},
        {"server.port": "0"},
        {"server.port": "70000"},
        {"app.debug": "maybe"},
        {"db.backend": "oracle"},
        {"db.backend": "sql"},
    ],
)
def test_invalid_settings_raise_configuration_error(overrides: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(overrides)


def test_sql_backend_with_url() -> None:
    settings = load_settings({"db.backend": "SQL", "db.url": "sqlite://"})

    assert settings.db_backend == "sql"
    assert settings.database_url == "sqlite://"
