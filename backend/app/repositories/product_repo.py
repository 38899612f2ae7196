import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from app.models.product import Product
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: uuid.UUID) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def exists(self, product_id: uuid.UUID) -> bool:
        return self.db.query(Product.id).filter(Product.id == product_id).first() is not None

    def get_price(self, product_id: uuid.UUID) -> Optional[Decimal]:
        row = self.db.query(Product.price).filter(Product.id == product_id).first()
        return row[0] if row else None

    def get_name(self, product_id: uuid.UUID) -> Optional[str]:
        row = self.db.query(Product.product_name).filter(Product.id == product_id).first()
        return row[0] if row else None

    def get_by_name(self, product_name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.product_name == product_name).first()

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.created_at.desc()).all()

    def create(
        self,
        product_name: str,
        price: Decimal,
        category: str,
        now: datetime,
        description: str = "",
        img_url: str = None,
        is_available: bool = True,
    ) -> Product:
        p = Product(
            id=uuid.uuid4(),
            product_name=product_name,
            description=description,
            price=price,
            category=category,
            img_url=img_url,
            is_available=is_available,
            created_at=now,
            updated_at=now,
        )
        self.db.add(p)
        self.db.flush()
        return p

    def update(self, p: Product, now: datetime, **fields) -> Product:
        for name, value in fields.items():
            setattr(p, name, value)
        p.updated_at = now
        self.db.flush()
        return p

    def delete_by_id(self, product_id: uuid.UUID) -> int:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id)
            .delete(synchronize_session=False)
        )
