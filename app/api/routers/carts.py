#app/api/routers/carts.py
from fastapi import APIRouter, Depends, Query, Response

from app.api import to_http
from app.api.deps import get_cart_service
from app.domain.errors import CartServiceError
from app.domain.schemas import ItemIn, CartOut
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Query(...),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(user_id)
    except CartServiceError as e:
        raise to_http(e)


@router.post("", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: int = Query(...),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(user_id, payload.product_id, payload.quantity)
    except CartServiceError as e:
        raise to_http(e)


@router.put("", response_model=CartOut)
def update_item(
    payload: ItemIn,
    user_id: int = Query(...),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_item(user_id, payload.product_id, payload.quantity)
    except CartServiceError as e:
        raise to_http(e)


@router.delete("/items/{product_id}", status_code=204)
def delete_item(
    product_id: str,
    user_id: int = Query(...),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.delete_item(user_id, product_id)
    except CartServiceError as e:
        raise to_http(e)
    return Response(status_code=204)


@router.put("/checkout", status_code=204)
def checkout(
    user_id: int = Query(...),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.checkout(user_id)
    except CartServiceError as e:
        raise to_http(e)
    return Response(status_code=204)
