import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.category import Category


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def get_name(self, category_id: str) -> str:
        """Category name for a stored id string; "" when unknown or malformed."""
        try:
            cid = uuid.UUID(str(category_id))
        except ValueError:
            return ""
        row = self.db.query(Category.name).filter(Category.id == cid).first()
        return row[0] if row else ""

    def list(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.created_at.desc()).all()

    def create(self, name: str, now: datetime) -> Category:
        c = Category(id=uuid.uuid4(), name=name, created_at=now, updated_at=now)
        self.db.add(c)
        self.db.flush()
        return c

    def delete_by_id(self, category_id: uuid.UUID) -> int:
        return (
            self.db.query(Category)
            .filter(Category.id == category_id)
            .delete(synchronize_session=False)
        )
