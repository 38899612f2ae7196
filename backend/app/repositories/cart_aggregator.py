import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Integer, Numeric, String, Text, Uuid, text
from sqlalchemy.orm import Session

from app.models.types import TZDateTime

# Earliest line id comes from a correlated subquery rather than
# array_agg(... ORDER BY ...)[1] so the query also runs on SQLite.
AGGREGATE_CART_SQL = text(
    """
    SELECT
        (SELECT c2.id FROM carts c2
          WHERE c2.user_id = :user_id AND c2.product_id = c.product_id
          ORDER BY c2.created_at, c2.id
          LIMIT 1) AS id,
        c.product_id AS product_id,
        SUM(c.total_qty) AS total_qty,
        MIN(c.created_at) AS created_at,
        MAX(c.updated_at) AS updated_at,
        p.product_name AS product_name,
        p.description AS description,
        p.price AS price,
        p.img_url AS img_url
    FROM carts c
    INNER JOIN products p ON c.product_id = p.id
    WHERE c.user_id = :user_id
    GROUP BY c.product_id, p.product_name, p.description, p.price, p.img_url
    ORDER BY c.product_id
    """
).columns(
    id=Uuid(),
    product_id=Uuid(),
    total_qty=Integer(),
    created_at=TZDateTime(),
    updated_at=TZDateTime(),
    product_name=String(),
    description=Text(),
    price=Numeric(10, 2),
    img_url=String(),
)


@dataclass
class AggregatedCartView:
    id: uuid.UUID
    product_id: uuid.UUID
    total_qty: int
    created_at: datetime
    updated_at: datetime
    product_name: str
    description: str
    price: Decimal
    img_url: Optional[str]
    sub_total_price: Decimal


class CartAggregator:
    def __init__(self, db: Session):
        self.db = db

    def aggregate_for_user(self, user_id: str) -> List[AggregatedCartView]:
        """
        One row per product in the user's cart: quantities summed, id of the
        earliest line, min created_at / max updated_at, product fields joined.
        sub_total_price is computed in Decimal from the typed price column.
        Returns [] when the user has no lines.
        """
        rows = self.db.execute(AGGREGATE_CART_SQL, {"user_id": user_id}).mappings().all()
        views = []
        for r in rows:
            price = Decimal(r["price"])
            total_qty = int(r["total_qty"])
            views.append(
                AggregatedCartView(
                    id=r["id"],
                    product_id=r["product_id"],
                    total_qty=total_qty,
                    created_at=r["created_at"],
                    updated_at=r["updated_at"],
                    product_name=r["product_name"],
                    description=r["description"],
                    price=price,
                    img_url=r["img_url"],
                    sub_total_price=price * total_qty,
                )
            )
        return views
