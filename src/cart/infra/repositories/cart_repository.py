from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Protocol
from uuid import uuid4

from cart.services.errors import NotFoundError


@dataclass
class CartItemRecord:
    product_id: str
    quantity: int


@dataclass
class CartRecord:
    id: str
    items: list[CartItemRecord] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def find_item(self, product_id: str) -> CartItemRecord | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None


class CartRepository(Protocol):
    def list(self) -> list[CartRecord]: ...

    def get(self, cart_id: str) -> CartRecord: ...

    def create(self) -> CartRecord: ...

    def delete(self, cart_id: str) -> None: ...

    def add_item(self, cart_id: str, product_id: str, quantity: int) -> CartRecord: ...

    def remove_item(self, cart_id: str, product_id: str) -> CartRecord: ...


class InMemoryCartRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._carts: dict[str, CartRecord] = {}

    def list(self) -> list[CartRecord]:
        return sorted(self._carts.values(), key=lambda cart: cart.created_at)

    def get(self, cart_id: str) -> CartRecord:
        cart = self._carts.get(cart_id)
        if cart is None:
            raise NotFoundError.for_resource("Cart", cart_id)
        return cart

    def create(self) -> CartRecord:
        now = datetime.now(timezone.utc)
        cart = CartRecord(id=str(uuid4()), created_at=now, updated_at=now)
        with self._lock:
            self._carts[cart.id] = cart
        return cart

    def delete(self, cart_id: str) -> None:
        with self._lock:
            if cart_id not in self._carts:
                raise NotFoundError.for_resource("Cart", cart_id)
            del self._carts[cart_id]

    def add_item(self, cart_id: str, product_id: str, quantity: int) -> CartRecord:
        with self._lock:
            cart = self.get(cart_id)
            item = cart.find_item(product_id)
            if item is None:
                cart.items.append(CartItemRecord(product_id=product_id, quantity=quantity))
            else:
                item.quantity += quantity
            cart.updated_at = datetime.now(timezone.utc)
            return cart

    def remove_item(self, cart_id: str, product_id: str) -> CartRecord:
        with self._lock:
            cart = self.get(cart_id)
            item = cart.find_item(product_id)
            if item is None:
                raise NotFoundError(f"Item '{product_id}' not found in cart '{cart_id}'")
            cart.items.remove(item)
            cart.updated_at = datetime.now(timezone.utc)
            return cart
