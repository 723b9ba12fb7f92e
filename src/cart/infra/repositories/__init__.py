from cart.infra.repositories.cart_repository import (
    CartItemRecord,
    CartRecord,
    CartRepository,
    InMemoryCartRepository,
)

__all__ = [
    "CartItemRecord",
    "CartRecord",
    "CartRepository",
    "InMemoryCartRepository",
]
