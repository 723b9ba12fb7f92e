"""Process startup for the cart service.

``start`` turns command-line overrides such as ``--server.port=9000`` into a
running :class:`ApplicationContext`. Misconfiguration is fatal: the cause is
logged and the process exits with status 1, without retrying.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import sys

from fastapi import FastAPI
import uvicorn

from cart.logging import configure_logging
from cart.main import create_app
from cart.services.errors import ConfigurationError
from cart.settings import Settings, load_settings, parse_overrides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiMetadata:
    title: str
    version: str
    description: str


@dataclass
class ApplicationContext:
    settings: Settings
    app: FastAPI

    @property
    def metadata(self) -> ApiMetadata:
        info = self.app.openapi()["info"]
        return ApiMetadata(
            title=info["title"],
            version=info["version"],
            description=info.get("description", ""),
        )

    def close(self) -> None:
        engine = self.app.state.engine
        if engine is not None:
            engine.dispose()
            self.app.state.engine = None


def build_context(args: Sequence[str]) -> ApplicationContext:
    settings = load_settings(parse_overrides(args))
    configure_logging(debug=settings.debug)
    app = create_app(settings)
    logger.info(
        "Started %s %s (db_backend=%s)",
        settings.app_name,
        settings.app_version,
        settings.db_backend,
    )
    return ApplicationContext(settings=settings, app=app)


def start(args: Sequence[str]) -> ApplicationContext:
    try:
        return build_context(args)
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Startup failed: %s", exc)
        raise SystemExit(1) from exc


def run(args: Sequence[str]) -> int:
    context = start(args)
    settings = context.settings
    try:
        uvicorn.run(
            context.app,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    finally:
        context.close()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)
