import uuid
from datetime import datetime
from typing import List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import InvalidArgument, NotFound, StorageError
from app.models.cart import CartLine
from app.repositories.cart_aggregator import AggregatedCartView, CartAggregator
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.utils.date_utils import local_datetime
from app.utils.logging import get_logger
from app.utils.transactions import smart_transaction

log = get_logger("app.services.cart", prefix="CART")


def parse_product_id(product_id: Union[uuid.UUID, str]) -> uuid.UUID:
    if isinstance(product_id, uuid.UUID):
        return product_id
    try:
        return uuid.UUID(str(product_id))
    except ValueError:
        raise InvalidArgument("Invalid product_id format.")


def check_user_id(user_id: str) -> str:
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidArgument("Invalid or missing user_id.")
    return user_id


def check_quantity(qty: int) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise InvalidArgument("Invalid quantity format. Must be a number.")
    if qty <= 0:
        raise InvalidArgument("Quantity must be greater than 0.")
    return qty


class CartService:
    """
    Cart use cases. Every call is one transaction; storage faults come back
    as StorageError, everything else as the CartError raised below.
    """

    def __init__(
        self,
        db: Session,
        cart_repo: CartRepository = None,
        product_repo: ProductRepository = None,
        aggregator: CartAggregator = None,
    ):
        self.db = db
        self.cart_repo = cart_repo or CartRepository(db)
        self.product_repo = product_repo or ProductRepository(db)
        self.aggregator = aggregator or CartAggregator(db)

    def _require_product(self, product_id: uuid.UUID):
        if not self.product_repo.exists(product_id):
            raise NotFound("No product found with this ID.")

    def add_to_cart(
        self,
        user_id: str,
        product_id: Union[uuid.UUID, str],
        qty: int,
        now: Optional[datetime] = None,
    ) -> Tuple[CartLine, bool]:
        """
        Add qty of a product to the user's cart. If the user already has a
        line for the product the quantity is added to it, otherwise a line is
        created. Returns (line, created).
        """
        check_user_id(user_id)
        check_quantity(qty)
        pid = parse_product_id(product_id)
        now = now or local_datetime()
        try:
            with smart_transaction(self.db):
                self._require_product(pid)
                line, created = self.cart_repo.add_quantity(user_id, pid, qty, now)
        except SQLAlchemyError as e:
            log.error(f"add_to_cart failed user={user_id!r} product={pid}: {e}")
            raise StorageError(f"Unable to add product to cart: {e}") from e
        log.info(
            f"{'created' if created else 'merged'} line {line.id} user={user_id!r} "
            f"product={pid} +{qty} -> {line.total_qty}"
        )
        return line, created

    def update_cart_quantity(
        self,
        user_id: str,
        product_id: Union[uuid.UUID, str],
        new_qty: int,
        now: Optional[datetime] = None,
    ) -> CartLine:
        """Overwrite (not add to) the quantity of an existing line."""
        check_user_id(user_id)
        check_quantity(new_qty)
        pid = parse_product_id(product_id)
        now = now or local_datetime()
        try:
            with smart_transaction(self.db):
                self._require_product(pid)
                line = self.cart_repo.find_by_user_and_product(user_id, pid)
                if line is None:
                    raise NotFound(
                        f"No cart item found for user '{user_id}' with product_id '{pid}'."
                    )
                line = self.cart_repo.update_quantity(line, new_qty, now)
        except SQLAlchemyError as e:
            log.error(f"update_cart_quantity failed user={user_id!r} product={pid}: {e}")
            raise StorageError(f"Database error while updating cart: {e}") from e
        log.info(f"set line {line.id} user={user_id!r} product={pid} qty={new_qty}")
        return line

    def get_cart_for_user(self, user_id: str) -> List[AggregatedCartView]:
        check_user_id(user_id)
        try:
            with smart_transaction(self.db):
                if not self.cart_repo.exists_for_user(user_id):
                    raise NotFound("Carts not found.")
                views = self.aggregator.aggregate_for_user(user_id)
        except SQLAlchemyError as e:
            log.error(f"get_cart_for_user failed user={user_id!r}: {e}")
            raise StorageError("Failed to fetch carts.") from e
        if not views:
            # lines exist but none joins a product (product deleted since)
            raise NotFound("No carts found for this user.")
        return views

    def remove_cart_item(self, user_id: str, product_id: Union[uuid.UUID, str]):
        check_user_id(user_id)
        pid = parse_product_id(product_id)
        try:
            with smart_transaction(self.db):
                self._require_product(pid)
                line = self.cart_repo.find_by_user_and_product(user_id, pid)
                if line is None:
                    raise NotFound(
                        f"No cart item found for user '{user_id}' with product_id '{pid}'."
                    )
                self.cart_repo.delete(line)
        except SQLAlchemyError as e:
            log.error(f"remove_cart_item failed user={user_id!r} product={pid}: {e}")
            raise StorageError(f"Database error while deleting cart item: {e}") from e
        log.info(f"removed product={pid} from cart of user={user_id!r}")

    def clear_cart(self, user_id: str) -> int:
        """Delete every line of the user's cart; returns how many were removed."""
        check_user_id(user_id)
        try:
            with smart_transaction(self.db):
                removed = self.cart_repo.delete_all_for_user(user_id)
                if removed == 0:
                    raise NotFound(f"No cart item found for user '{user_id}'.")
        except SQLAlchemyError as e:
            log.error(f"clear_cart failed user={user_id!r}: {e}")
            raise StorageError(f"Database error while deleting cart item: {e}") from e
        log.info(f"cleared {removed} line(s) for user={user_id!r}")
        return removed
