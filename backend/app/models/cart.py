from sqlalchemy import Column, Index, Integer, String, Uuid

from app.db import Base
from app.models.types import TZDateTime


class CartLine(Base):
    """
    One row per (user, product) in a cart. user_id is an opaque string with no
    user table behind it; product_id is checked against products by the service.
    """

    __tablename__ = "carts"
    __table_args__ = (
        # conflict target for the add-to-cart upsert
        Index("uq_carts_user_product", "user_id", "product_id", unique=True),
    )

    id = Column(Uuid, primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    product_id = Column(Uuid, nullable=False, index=True)
    total_qty = Column(Integer, nullable=False)
    created_at = Column(TZDateTime, nullable=False)
    updated_at = Column(TZDateTime, nullable=False)

    def __repr__(self):
        return f"<CartLine user={self.user_id} product={self.product_id} qty={self.total_qty}>"
