# cartstore/api/routers/carts.py
from typing import List

import redis
from fastapi import APIRouter, Depends, HTTPException

from cartstore.data.database import get_redis
from cartstore.domain.errors import BackendUnavailable, CartItemNotFound, CartValidationError
from cartstore.domain.schemas import (
    AddItemIn,
    Cart,
    CartItem,
    SetTierIn,
    StatisticsOut,
    SuccessOut,
    SweepOut,
    UpdateItemIn,
)
from cartstore.services.cart_service import CartService, create_cart_service
from cartstore.services.sweeper import ExpirySweeper

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(client: redis.Redis = Depends(get_redis)) -> CartService:
    return create_cart_service(client)


def get_sweeper(svc: CartService = Depends(get_service)) -> ExpirySweeper:
    return ExpirySweeper(svc)


# statyczne sciezki przed /{user_id}
@router.get("/expired", response_model=List[CartItem])
def get_expired_items(sweeper: ExpirySweeper = Depends(get_sweeper)):
    try:
        return sweeper.find_expired()
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/sweep", response_model=SweepOut)
def sweep_expired_items(sweeper: ExpirySweeper = Depends(get_sweeper)):
    try:
        return SweepOut(removed=sweeper.sweep())
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/statistics", response_model=StatisticsOut)
def get_statistics(svc: CartService = Depends(get_service)):
    try:
        return svc.get_statistics()
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/items", response_model=CartItem, status_code=201)
def add_item(payload: AddItemIn, svc: CartService = Depends(get_service)):
    try:
        return svc.add_item(
            user_id=payload.user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            unit_price=payload.unit_price,
            name=payload.name,
            description=payload.description,
            image_url=payload.image_url,
        )
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{user_id}", response_model=Cart)
def get_cart(user_id: int, svc: CartService = Depends(get_service)):
    return svc.get_cart(user_id)


@router.put("/{user_id}/items/{item_id}", response_model=CartItem)
def update_item(
    user_id: int,
    item_id: str,
    payload: UpdateItemIn,
    svc: CartService = Depends(get_service),
):
    try:
        return svc.update_item(user_id, item_id, payload.quantity)
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/{user_id}/items/{item_id}", response_model=SuccessOut)
def remove_item(user_id: int, item_id: str, svc: CartService = Depends(get_service)):
    try:
        return SuccessOut(success=svc.remove_item(user_id, item_id))
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/{user_id}", response_model=SuccessOut)
def clear_cart(user_id: int, svc: CartService = Depends(get_service)):
    try:
        return SuccessOut(success=svc.clear_cart(user_id))
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{user_id}/tier", response_model=SuccessOut)
def set_tier(user_id: int, payload: SetTierIn, svc: CartService = Depends(get_service)):
    """success=false gdy koszyk jest pusty (zmiana poziomu nie ma zastosowania)."""
    try:
        return SuccessOut(success=svc.set_tier(user_id, payload.tier))
    except BackendUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
