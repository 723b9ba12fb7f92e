from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str | list[str]


class HealthResponse(BaseModel):
    status: str
    name: str
    version: str


class CartItemRequest(BaseModel):
    # used as a path segment in DELETE /carts/{id}/items/{product_id}
    product_id: str = Field(min_length=1, max_length=64, pattern=r"^[^/]+$")
    quantity: int = Field(default=1, ge=1)


class CartItemResponse(BaseModel):
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    id: str
    items: list[CartItemResponse]
    created_at: datetime
    updated_at: datetime
