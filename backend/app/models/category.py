import uuid

from sqlalchemy import Column, String, Uuid
from app.db import Base
from app.models.types import TZDateTime

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(128), unique=True, index=True, nullable=False)  # trimmed, lower-cased
    created_at = Column(TZDateTime, nullable=False)
    updated_at = Column(TZDateTime, nullable=False)

    def __repr__(self):
        return f"<Category name={self.name}>"
