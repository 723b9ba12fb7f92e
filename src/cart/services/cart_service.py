from __future__ import annotations

from cart.infra.repositories.cart_repository import CartRecord, CartRepository
from cart.services.errors import BadRequestError


class CartService:
    def __init__(self, repository: CartRepository) -> None:
        self._repository = repository

    def list_carts(self) -> list[CartRecord]:
        return self._repository.list()

    def get_cart(self, cart_id: str) -> CartRecord:
        return self._repository.get(cart_id)

    def create_cart(self) -> CartRecord:
        return self._repository.create()

    def delete_cart(self, cart_id: str) -> None:
        self._repository.delete(cart_id)

    def add_item(self, cart_id: str, product_id: str, quantity: int = 1) -> CartRecord:
        product_id = product_id.strip()
        if not product_id:
            raise BadRequestError("product_id must not be blank")
        if "/" in product_id:
            raise BadRequestError(f"product_id must not contain '/', got {product_id!r}")
        if quantity <= 0:
            raise BadRequestError(f"quantity must be positive, got {quantity}")
        return self._repository.add_item(cart_id, product_id, quantity)

    def remove_item(self, cart_id: str, product_id: str) -> CartRecord:
        return self._repository.remove_item(cart_id, product_id.strip())
