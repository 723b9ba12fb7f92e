from __future__ import annotations

from collections.abc import Generator

from fastapi import Request

from cart.infra.repositories.sql_cart_repository import SqlCartRepository
from cart.services.cart_service import CartService


def get_cart_service(request: Request) -> Generator[CartService, None, None]:
    session_factory = request.app.state.session_factory
    if session_factory is None:
        yield CartService(repository=request.app.state.cart_repository)
        return

    with session_factory() as db:
        yield CartService(repository=SqlCartRepository(db))
