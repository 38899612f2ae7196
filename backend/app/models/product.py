import uuid

from sqlalchemy import Boolean, Column, Numeric, String, Text, Uuid
from app.db import Base
from app.models.types import TZDateTime

class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_name = Column(String(256), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False, default=0)
    category = Column(String(64), nullable=False)  # category id, not enforced
    img_url = Column(String(512), nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(TZDateTime, nullable=False)
    updated_at = Column(TZDateTime, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} name={self.product_name}>"
