import uuid
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import Conflict, InvalidArgument, NotFound, StorageError
from app.models.category import Category
from app.models.product import Product
from app.repositories.category_repo import CategoryRepository
from app.repositories.product_repo import ProductRepository
from app.utils.date_utils import local_datetime
from app.utils.logging import get_logger
from app.utils.transactions import smart_transaction

log = get_logger("app.services.catalogue", prefix="CATALOGUE")


def _parse_id(value, what: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidArgument(f"Invalid {what} format. Must be a valid UUID.")


class CatalogueService:
    """Plain CRUD for products and categories."""

    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)
        self.category_repo = CategoryRepository(db)

    # products

    def product_to_dict(self, p: Product) -> Dict:
        return {
            "id": p.id,
            "product_name": p.product_name,
            "description": p.description,
            "price": p.price,
            "category": p.category,
            "category_name": self.category_repo.get_name(p.category),
            "img_url": p.img_url,
            "is_available": p.is_available,
            "created_at": p.created_at,
            "updated_at": p.updated_at,
        }

    def create_product(
        self,
        product_name: str,
        price: Decimal,
        category: str,
        description: str = "",
        img_url: str = None,
        is_available: bool = True,
    ) -> Product:
        name = product_name.strip()
        if not name:
            raise InvalidArgument("Product name must not be empty.")
        if price < 0:
            raise InvalidArgument("Price must not be negative.")
        now = local_datetime()
        try:
            with smart_transaction(self.db):
                if self.product_repo.get_by_name(name):
                    raise Conflict("A product with this name already exists.")
                p = self.product_repo.create(
                    name,
                    price,
                    category,
                    now,
                    description=description,
                    img_url=img_url,
                    is_available=is_available,
                )
        except IntegrityError as e:
            raise Conflict("A product with this name already exists.") from e
        except SQLAlchemyError as e:
            log.error(f"create_product failed: {e}")
            raise StorageError(f"Failed to create product: {e}") from e
        log.info(f"created product {p.id} {name!r}")
        return p

    def list_products(self) -> List[Product]:
        try:
            with smart_transaction(self.db):
                products = self.product_repo.list()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to fetch products: {e}") from e
        if not products:
            raise NotFound("No products found.")
        return products

    def get_product(self, product_id) -> Product:
        pid = _parse_id(product_id, "product_id")
        try:
            with smart_transaction(self.db):
                p = self.product_repo.get(pid)
        except SQLAlchemyError as e:
            raise StorageError(f"Database error: {e}") from e
        if p is None:
            raise NotFound("Product not found.")
        return p

    def update_product(
        self,
        product_id,
        product_name: str,
        price: Decimal,
        category: str,
        description: str = "",
        img_url: str = None,
        is_available: bool = True,
    ) -> Product:
        pid = _parse_id(product_id, "product_id")
        name = product_name.strip()
        if not name:
            raise InvalidArgument("Product name must not be empty.")
        now = local_datetime()
        try:
            with smart_transaction(self.db):
                p = self.product_repo.get(pid)
                if p is None:
                    raise NotFound("Product not found.")
                self.product_repo.update(
                    p,
                    now,
                    product_name=name,
                    description=description,
                    price=price,
                    category=category,
                    img_url=img_url,
                    is_available=is_available,
                )
        except SQLAlchemyError as e:
            log.error(f"update_product failed {pid}: {e}")
            raise StorageError(f"Failed to update product: {e}") from e
        log.info(f"updated product {pid}")
        return p

    def delete_product(self, product_id):
        pid = _parse_id(product_id, "product_id")
        try:
            with smart_transaction(self.db):
                deleted = self.product_repo.delete_by_id(pid)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete product: {e}") from e
        if not deleted:
            raise NotFound("Product not found or already deleted.")
        log.info(f"deleted product {pid}")

    # categories

    def create_category(self, name: str) -> Category:
        normalized = name.strip().lower()
        if not normalized:
            raise InvalidArgument("Category name must not be empty.")
        now = local_datetime()
        try:
            with smart_transaction(self.db):
                if self.category_repo.get_by_name(normalized):
                    raise Conflict("Category with this name already exists")
                c = self.category_repo.create(normalized, now)
        except IntegrityError as e:
            raise Conflict("Category with this name already exists") from e
        except SQLAlchemyError as e:
            log.error(f"create_category failed: {e}")
            raise StorageError(f"Failed to create category: {e}") from e
        log.info(f"created category {c.id} {normalized!r}")
        return c

    def list_categories(self) -> List[Category]:
        try:
            with smart_transaction(self.db):
                categories = self.category_repo.list()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to fetch categories: {e}") from e
        if not categories:
            raise NotFound("No categories found")
        return categories

    def delete_category(self, category_id):
        cid = _parse_id(category_id, "category_id")
        try:
            with smart_transaction(self.db):
                deleted = self.category_repo.delete_by_id(cid)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete category record: {e}") from e
        if not deleted:
            raise NotFound("Category not found")
        log.info(f"deleted category {cid}")
