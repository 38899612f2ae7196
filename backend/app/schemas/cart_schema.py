import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.product_schema import Money


class NewCart(BaseModel):
    user_id: str
    product_id: str
    total_qty: int


class CartLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    user_id: str
    product_id: uuid.UUID
    total_qty: int
    created_at: datetime
    updated_at: datetime


class CartViewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    product_id: uuid.UUID
    total_qty: int
    created_at: datetime
    updated_at: datetime
    product_name: str
    description: str
    price: Money
    img_url: Optional[str] = None
    sub_total_price: Money
