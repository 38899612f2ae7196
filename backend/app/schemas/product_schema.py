# backend/app/schemas/product_schema.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from pydantic import BaseModel, Field, PlainSerializer
from pydantic import ConfigDict

# money leaves the API as a fixed two-place string, never a float
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(Decimal(v).quantize(Decimal("0.01"))), return_type=str, when_used="json"),
]

class NewProduct(BaseModel):
    product_name: str
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str
    img_url: Optional[str] = None
    is_available: bool = True

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    product_name: str
    description: str
    price: Money
    category: str
    category_name: str = ""
    img_url: Optional[str] = None
    is_available: bool
    created_at: datetime
    updated_at: datetime

class NewCategory(BaseModel):
    name: str

class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
