from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from .fields import DEFAULT_FIELDS, FieldProjector
from .models import (
    Category,
    Delivery,
    Order,
    OrderLine,
    Product,
    ProductImage,
    User,
    hydrate,
    image_prefix,
)
from .normalizer import BOOL, Result, normalize
from .ranges import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    DateLike,
    DateWindow,
    Status,
    as_date,
    format_status,
    month_windows,
)
from .session import Session

# Every status except 5 (cancelled)
RECENT_STATUS = (1, 2, 3, 4, 6, 7, 8)
DEFAULT_STATUS = RECENT_STATUS
DEFAULT_IMAGE_PREFIX = image_prefix(1434)

Bound = Optional[DateLike]


def format_bound(value: Bound) -> Optional[str]:
    """Render a date bound the way the service expects; ``None`` is unbounded."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    return value.strftime(DATE_FORMAT)


class HostedShopClient:
    """One logged-in HostedShop session plus its field declarations and caches.

    Not safe for concurrent use; give each thread its own client.
    """

    def __init__(
        self,
        session: Session,
        image_prefix: str = DEFAULT_IMAGE_PREFIX,
        apply_default_fields: bool = True,
    ) -> None:
        self.session = session
        self.image_prefix = image_prefix
        self.fields = FieldProjector(self.call)
        self.all_users: Optional[Dict[Any, User]] = None
        self.orders: Optional[List[Order]] = None
        self._orders_key: Optional[tuple] = None
        if apply_default_fields:
            for entity_type, names in DEFAULT_FIELDS.items():
                self.fields.set_fields(entity_type, names)

    def call(self, procedure: str, args: Optional[Dict[str, Any]] = None) -> Result:
        """Invoke ``procedure`` and normalize its envelope."""
        return normalize(procedure, self.session.invoke(procedure, args or {}))

    def set_fields(self, entity_type: str, field_names: Iterable[str]) -> bool:
        return self.fields.set_fields(entity_type, field_names)

    # Users

    def get_users(self, use_cache: bool = True) -> Dict[Any, User]:
        """All users keyed by id. Cached until called with ``use_cache=False``."""
        if use_cache and self.all_users is not None:
            return self.all_users
        users = {}
        for record in self.call("User_GetAll").as_sequence():
            user = hydrate(User, record)
            users[user.Id] = user
        self.all_users = users
        return users

    # Orders

    def get_orders(
        self,
        use_cache: bool = True,
        days: int = 1,
        status: Status = RECENT_STATUS,
    ) -> List[Order]:
        """Orders from the last ``days`` days, cached like ``get_users``.

        The cache only answers a call for the same ``days`` and ``status`` it
        was filled with; anything else refetches and replaces it.
        """
        key = (days, format_status(status))
        if use_cache and self.orders is not None and self._orders_key == key:
            return self.orders
        today = date.today()
        self.orders = self.fetch_orders(today - timedelta(days=days), today, status)
        self._orders_key = key
        return self.orders

    def get_order(self, order_id: int) -> Order:
        record = self.call("Order_GetById", {"OrderId": order_id}).as_record()
        return hydrate(Order, record)

    def get_users_orders(
        self, user_id: int, start: Bound = None, end: Bound = None
    ) -> List[Order]:
        result = self.call(
            "Order_GetByDateAndUser",
            {"UserId": user_id, "Start": format_bound(start), "End": format_bound(end)},
        )
        return [hydrate(Order, r) for r in result.as_sequence()]

    def get_updated_orders(
        self, status: Status, start: Bound = None, end: Bound = None
    ) -> List[Order]:
        """Orders updated between ``start`` and ``end`` (either may be open)."""
        result = self.call(
            "Order_GetByDateUpdated",
            {
                "Status": format_status(status),
                "Start": format_bound(start),
                "End": format_bound(end),
            },
        )
        return [hydrate(Order, r) for r in result.as_sequence()]

    def get_order_lines(self, order_id: int) -> List[OrderLine]:
        result = self.call("Order_GetLines", {"OrderId": order_id})
        return [hydrate(OrderLine, r) for r in result.as_sequence()]

    def fetch_orders(self, start: DateLike, end: DateLike, status: Status) -> List[Order]:
        """Orders placed between two calendar days in a single call."""
        window = DateWindow(as_date(start), as_date(end), format_status(status))
        return self._fetch_window(window)

    def fetch_orders_from(
        self,
        start: DateLike,
        status: Status = DEFAULT_STATUS,
        until: Optional[DateLike] = None,
    ) -> List[Order]:
        """Orders placed since ``start``, fetched one month window at a time."""
        until = until or date.today()
        orders: List[Order] = []
        for window in month_windows(start, until, status):
            batch = self._fetch_window(window)
            logging.info(
                "orders window %s..%s status=%s count=%s total=%s",
                window.start, window.end, window.status, len(batch), len(orders) + len(batch),
            )
            orders.extend(batch)
        return orders

    def _fetch_window(self, window: DateWindow) -> List[Order]:
        result = self.call("Order_GetByDate", window.as_args())
        return [hydrate(Order, r) for r in result.as_sequence()]

    def update_order_status(self, order_id: int, status: int) -> bool:
        return self.call("Order_UpdateStatus", {"OrderId": order_id, "Status": status}).as_bool()

    def update_order_comment(self, order_id: int, comment: str) -> bool:
        return self.call(
            "Order_UpdateComment", {"OrderId": order_id, "Comment": comment}
        ).as_bool()

    # Products

    def get_product(self, product_id: int) -> Optional[Product]:
        """The product, or ``None`` if the service has no product with that id."""
        result = self.call("Product_GetById", {"ProductId": product_id})
        if result.kind == BOOL:
            return None
        records = result.as_sequence()
        if not records or not records[0].get("Id"):
            return None
        return hydrate(Product, result.as_record())

    def search_products(self, term: str) -> List[Product]:
        result = self.call("Product_Search", {"SearchString": term})
        return [hydrate(Product, r) for r in result.as_sequence()]

    def get_product_images(
        self, product_id: int, prefix: Optional[str] = None
    ) -> List[ProductImage]:
        """Images of a product with ``FilePath`` pointing at the asset host."""
        if prefix is None:
            prefix = self.image_prefix
        result = self.call("Product_GetPictures", {"ProductId": product_id})
        return [hydrate(ProductImage, r, prefix=prefix) for r in result.as_sequence()]

    def delete_product(self, product_id: int) -> bool:
        return self.call("Product_Delete", {"ProductId": product_id}).as_bool()

    # Categories and deliveries

    def get_categories(self) -> List[Category]:
        return [hydrate(Category, r) for r in self.call("Category_GetAll").as_sequence()]

    def delete_category(self, category_id: int) -> bool:
        return self.call("Category_Delete", {"CategoryId": category_id}).as_bool()

    def get_deliveries(self) -> List[Delivery]:
        return [hydrate(Delivery, r) for r in self.call("Delivery_GetAll").as_sequence()]
