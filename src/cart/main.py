from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from cart.api.routers.carts import router as carts_router
from cart.api.routers.health import router as health_router
from cart.infra.db.session import build_engine, build_session_factory, init_database
from cart.infra.repositories.cart_repository import CartRepository, InMemoryCartRepository
from cart.services.errors import BadRequestError, NotFoundError
from cart.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    repository: CartRepository | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """Build the HTTP application.

    With no explicit storage, ``settings.db_backend`` decides: ``memory`` gets a
    fresh in-memory repository, ``sql`` connects to ``settings.database_url``
    and creates the tables. Serve it with ``uvicorn --factory cart.main:create_app``
    or through ``python -m cart``.
    """
    active_settings = settings or load_settings()

    app = FastAPI(
        title=active_settings.app_name,
        version=active_settings.app_version,
        description=active_settings.app_description,
        debug=active_settings.debug,
    )
    app.state.settings = active_settings
    app.state.engine = None

    if repository is None and session_factory is None:
        if active_settings.db_backend == "sql":
            engine = build_engine(active_settings.database_url or "")
            try:
                init_database(engine)
            except Exception:
                engine.dispose()
                raise
            app.state.engine = engine
            session_factory = build_session_factory(engine)
        else:
            repository = InMemoryCartRepository()
    app.state.cart_repository = repository
    app.state.session_factory = session_factory

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(_: Request, exc: BadRequestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def handle_value_error(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(HTTPException)
    async def passthrough_http(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    app.include_router(health_router)
    app.include_router(carts_router)

    logger.debug("Application %s %s created (db_backend=%s)", app.title, app.version, active_settings.db_backend)
    return app
