from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.orm import Session

from cart.infra.db.models import CartModel
from cart.infra.repositories.cart_repository import CartItemRecord, CartRecord, CartRepository
from cart.services.errors import NotFoundError


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlCartRepository(CartRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def _to_record(self, model: CartModel) -> CartRecord:
        return CartRecord(
            id=model.id,
            items=[CartItemRecord(product_id=item["product_id"], quantity=item["quantity"]) for item in model.items],
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _get_model(self, cart_id: str) -> CartModel:
        model = self._db.get(CartModel, cart_id)
        if model is None:
            raise NotFoundError.for_resource("Cart", cart_id)
        return model

    def _save(self, model: CartModel) -> CartRecord:
        self._db.add(model)
        self._db.commit()
        self._db.refresh(model)
        return self._to_record(model)

    def list(self) -> list[CartRecord]:
        rows = self._db.query(CartModel).order_by(CartModel.created_at.asc()).all()
        return [self._to_record(row) for row in rows]

    def get(self, cart_id: str) -> CartRecord:
        return self._to_record(self._get_model(cart_id))

    def create(self) -> CartRecord:
        return self._save(CartModel(id=str(uuid4()), items=[]))

    def delete(self, cart_id: str) -> None:
        model = self._get_model(cart_id)
        self._db.delete(model)
        self._db.commit()

    def add_item(self, cart_id: str, product_id: str, quantity: int) -> CartRecord:
        model = self._get_model(cart_id)
        items = [dict(item) for item in model.items]
        for item in items:
            if item["product_id"] == product_id:
                item["quantity"] += quantity
                break
        else:
            items.append({"product_id": product_id, "quantity": quantity})
        # JSON columns only notice reassignment
        model.items = items
        return self._save(model)

    def remove_item(self, cart_id: str, product_id: str) -> CartRecord:
        model = self._get_model(cart_id)
        items = [item for item in model.items if item["product_id"] != product_id]
        if len(items) == len(model.items):
            raise NotFoundError(f"Item '{product_id}' not found in cart '{cart_id}'")
        model.items = items
        return self._save(model)
