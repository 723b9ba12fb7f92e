from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import os
from pathlib import Path

from cart.services.errors import ConfigurationError

DEFAULT_APP_NAME = "Cart Restful Web Service"
DEFAULT_APP_VERSION = "v1"
DEFAULT_APP_DESCRIPTION = "Cart Restful Web Service documentation"

DB_BACKENDS = frozenset({"memory", "sql"})

# override key -> (environment variable, default)
_SOURCES: dict[str, tuple[str, str | None]] = {
    "app.name": ("APP_NAME", DEFAULT_APP_NAME),
    "app.version": ("APP_VERSION", DEFAULT_APP_VERSION),
    "app.description": ("APP_DESCRIPTION", DEFAULT_APP_DESCRIPTION),
    "app.debug": ("APP_DEBUG", "false"),
    "db.backend": ("DB_BACKEND", "memory"),
    "db.url": ("DATABASE_URL", None),
    "server.host": ("SERVER_HOST", "127.0.0.1"),
    "server.port": ("SERVER_PORT", "8080"),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _load_local_env_file() -> None:
    """Load variables from .env if present, without overwriting exported ones."""
    env_path = Path('.env')
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding='utf-8').splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = line.split('=', 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, value)


_load_local_env_file()


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    app_description: str
    debug: bool
    db_backend: str
    database_url: str | None
    host: str
    port: int


def parse_overrides(args: Sequence[str]) -> dict[str, str]:
    """Collect ``--key=value`` arguments; anything not starting with ``--`` is ignored."""
    overrides: dict[str, str] = {}
    for arg in args:
        if not arg.startswith("--"):
            continue
        key, sep, value = arg[2:].partition("=")
        key = key.strip()
        if not key:
            raise ConfigurationError(f"Malformed override {arg!r}")
        if key not in _SOURCES:
            raise ConfigurationError(f"Unknown configuration key {key!r}")
        overrides[key] = value if sep else "true"
    return overrides


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"server.port must be an integer, got {raw!r}") from None
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"server.port must be between 1 and 65535, got {port}")
    return port


def load_settings(overrides: Mapping[str, str] | None = None) -> Settings:
    overrides = overrides or {}
    unknown = set(overrides) - set(_SOURCES)
    if unknown:
        raise ConfigurationError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    def resolve(key: str) -> str | None:
        if key in overrides:
            return overrides[key]
        env_var, default = _SOURCES[key]
        return os.getenv(env_var, default)

    db_backend = (resolve("db.backend") or "").strip().lower()
    if db_backend not in DB_BACKENDS:
        raise ConfigurationError(
            f"db.backend must be one of {', '.join(sorted(DB_BACKENDS))}, got {db_backend!r}"
        )

    database_url = resolve("db.url") or None
    if db_backend == "sql" and not database_url:
        raise ConfigurationError("db.url (DATABASE_URL) is required when db.backend=sql")

    return Settings(
        app_name=resolve("app.name") or DEFAULT_APP_NAME,
        app_version=resolve("app.version") or DEFAULT_APP_VERSION,
        app_description=resolve("app.description") or DEFAULT_APP_DESCRIPTION,
        debug=_parse_bool("app.debug", resolve("app.debug") or ""),
        db_backend=db_backend,
        database_url=database_url,
        host=resolve("server.host") or "127.0.0.1",
        port=_parse_port(resolve("server.port") or ""),
    )
