import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.errors import NotFound
from app.models.cart import CartLine

# dialects with INSERT ... ON CONFLICT DO UPDATE ... RETURNING
UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user_and_product(self, user_id: str, product_id: uuid.UUID) -> Optional[CartLine]:
        return (
            self.db.query(CartLine)
            .filter(CartLine.user_id == user_id, CartLine.product_id == product_id)
            .first()
        )

    def find_all_for_user(self, user_id: str) -> List[CartLine]:
        return (
            self.db.query(CartLine)
            .filter(CartLine.user_id == user_id)
            .order_by(CartLine.created_at, CartLine.id)
            .all()
        )

    def exists_for_user(self, user_id: str) -> bool:
        q = self.db.query(CartLine).filter(CartLine.user_id == user_id)
        return bool(self.db.query(q.exists()).scalar())

    def insert(self, user_id: str, product_id: uuid.UUID, qty: int, now: datetime) -> CartLine:
        line = CartLine(
            id=uuid.uuid4(),
            user_id=user_id,
            product_id=product_id,
            total_qty=qty,
            created_at=now,
            updated_at=now,
        )
        self.db.add(line)
        self.db.flush()
        return line

    def add_quantity(
        self, user_id: str, product_id: uuid.UUID, qty: int, now: datetime
    ) -> Tuple[CartLine, bool]:
        """
        Add qty to the (user, product) line, creating it if missing, as one
        statement. Returns (line, created).
        """
        insert = UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            return self._add_quantity_locked(user_id, product_id, qty, now)

        new_id = uuid.uuid4()
        stmt = insert(CartLine).values(
            [
                {
                    "id": new_id,
                    "user_id": user_id,
                    "product_id": product_id,
                    "total_qty": qty,
                    "created_at": now,
                    "updated_at": now,
                }
            ]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={
                "total_qty": CartLine.total_qty + stmt.excluded.total_qty,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        line = self.db.scalars(
            stmt.returning(CartLine), execution_options={"populate_existing": True}
        ).one()
        # the freshly generated id only survives when no row existed
        return line, line.id == new_id

    def _add_quantity_locked(self, user_id, product_id, qty, now):
        line = (
            self.db.query(CartLine)
            .filter(CartLine.user_id == user_id, CartLine.product_id == product_id)
            .with_for_update()
            .first()
        )
        if line is None:
            return self.insert(user_id, product_id, qty, now), True
        line.total_qty = line.total_qty + qty
        line.updated_at = now
        self.db.flush()
        return line, False

    def update_quantity(self, line: CartLine, new_qty: int, now: datetime) -> CartLine:
        result = self.db.execute(
            update(CartLine)
            .where(CartLine.id == line.id)
            .values(total_qty=new_qty, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFound(f"Cart item {line.id} no longer exists.")
        self.db.refresh(line)
        return line

    def delete(self, line: CartLine):
        self.db.delete(line)
        self.db.flush()

    def delete_all_for_user(self, user_id: str) -> int:
        return (
            self.db.query(CartLine)
            .filter(CartLine.user_id == user_id)
            .delete(synchronize_session=False)
        )
