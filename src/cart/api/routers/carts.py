from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from cart.api.deps import get_cart_service
from cart.api.schemas import CartItemRequest, CartItemResponse, CartResponse, ErrorResponse
from cart.infra.repositories.cart_repository import CartRecord
from cart.services.cart_service import CartService

router = APIRouter(
    prefix="/carts",
    tags=["carts"],
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)


def _to_response(cart: CartRecord) -> CartResponse:
    return CartResponse(
        id=cart.id,
        items=[CartItemResponse(product_id=item.product_id, quantity=item.quantity) for item in cart.items],
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


@router.get("", response_model=list[CartResponse])
def list_carts(service: CartService = Depends(get_cart_service)) -> list[CartResponse]:
    return [_to_response(cart) for cart in service.list_carts()]


@router.post("", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def create_cart(service: CartService = Depends(get_cart_service)) -> CartResponse:
    return _to_response(service.create_cart())


@router.get("/{cart_id}", response_model=CartResponse)
def get_cart(
    cart_id: str,
    service: CartService = Depends(get_cart_service),
) -> CartResponse:
    return _to_response(service.get_cart(cart_id))


@router.delete("/{cart_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart(
    cart_id: str,
    service: CartService = Depends(get_cart_service),
) -> Response:
    service.delete_cart(cart_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{cart_id}/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def add_item(
    cart_id: str,
    body: CartItemRequest,
    service: CartService = Depends(get_cart_service),
) -> CartResponse:
    return _to_response(service.add_item(cart_id, body.product_id, body.quantity))


@router.delete("/{cart_id}/items/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    cart_id: str,
    product_id: str,
    service: CartService = Depends(get_cart_service),
) -> Response:
    service.remove_item(cart_id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
