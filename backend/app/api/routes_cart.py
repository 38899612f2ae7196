from app.db import get_db
from app.errors import CartError
from app.schemas.cart_schema import CartLineOut, CartViewOut, NewCart
from app.services.cart_service import CartService
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

router = APIRouter(tags=["cart"])


@router.post("/carts/", summary="Add product to cart")
def add_to_cart(payload: NewCart, response: Response, db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        line, created = svc.add_to_cart(payload.user_id, payload.product_id, payload.total_qty)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    if created:
        response.status_code = status.HTTP_201_CREATED
        message = "The product was successfully added to the cart."
    else:
        message = f"Product quantity updated in cart. Added {payload.total_qty} items."
    return {
        "success": True,
        "message": message,
        "data": [CartLineOut.model_validate(line).model_dump(mode="json")],
    }


@router.get("/carts/{user_id}", summary="Get aggregated cart for a user")
def get_cart(user_id: str, db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        views = svc.get_cart_for_user(user_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Carts fetched successfully.",
        "data": [CartViewOut.model_validate(v).model_dump(mode="json") for v in views],
    }


@router.put("/carts/qty/{user_id}/{product_id}/{qty}/", summary="Set cart quantity")
def update_cart_qty(user_id: str, product_id: str, qty: str, db: Session = Depends(get_db)):
    try:
        new_qty = int(qty)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid quantity format. Must be a number.")
    svc = CartService(db)
    try:
        line = svc.update_cart_quantity(user_id, product_id, new_qty)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Cart quantity updated successfully.",
        "data": CartLineOut.model_validate(line).model_dump(mode="json"),
    }


@router.delete("/carts/{user_id}/{product_id}", summary="Remove product from cart")
def delete_cart_item(user_id: str, product_id: str, db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        svc.remove_cart_item(user_id, product_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": f"Cart item successfully deleted for user '{user_id}' and product '{product_id}'.",
        "data": None,
    }


@router.delete("/carts/{user_id}", summary="Remove every item from a user's cart")
def delete_all_cart_items(user_id: str, db: Session = Depends(get_db)):
    svc = CartService(db)
    try:
        removed = svc.clear_cart(user_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": f"Cart items successfully deleted for user '{user_id}'.",
        "data": {"deleted": removed},
    }
