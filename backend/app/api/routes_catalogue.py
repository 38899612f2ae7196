from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.errors import CartError
from app.schemas.product_schema import CategoryOut, NewCategory, NewProduct, ProductOut
from app.services.catalogue_service import CatalogueService

router = APIRouter(tags=["catalogue"])


def _product_out(svc: CatalogueService, p):
    return ProductOut.model_validate(svc.product_to_dict(p)).model_dump(mode="json")

@router.post("/products/", summary="Create product", status_code=status.HTTP_201_CREATED)
def create_product(payload: NewProduct, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        p = svc.create_product(**payload.model_dump())
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Product created successfully.", "data": [_product_out(svc, p)]}

@router.get("/products", summary="List products")
def list_products(db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        items = svc.list_products()
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Products fetched successfully.",
        "data": [_product_out(svc, p) for p in items],
    }

@router.get("/products/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        p = svc.get_product(product_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Product fetched successfully.", "data": [_product_out(svc, p)]}

@router.put("/products/{product_id}/", summary="Update product")
def update_product(product_id: str, payload: NewProduct, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        p = svc.update_product(product_id, **payload.model_dump())
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Product updated successfully.", "data": [_product_out(svc, p)]}

@router.delete("/products/{product_id}", summary="Delete product")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        svc.delete_product(product_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Product deleted successfully.", "data": None}

@router.post("/category/", summary="Create category", status_code=status.HTTP_201_CREATED)
def add_category(payload: NewCategory, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        c = svc.create_category(payload.name)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Category created successfully",
        "data": [CategoryOut.model_validate(c).model_dump(mode="json")],
    }

@router.get("/category", summary="List categories")
def fetch_categories(db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        items = svc.list_categories()
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {
        "success": True,
        "message": "Categories fetched successfully",
        "data": [CategoryOut.model_validate(c).model_dump(mode="json") for c in items],
    }

@router.delete("/category/{category_id}", summary="Delete category")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        svc.delete_category(category_id)
    except CartError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"success": True, "message": "Category deleted successfully", "data": None}
