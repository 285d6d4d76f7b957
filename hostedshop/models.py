"""Plain data holders for HostedShop records.

Fields listed in ``FIELDS`` become attributes (``None`` when the service left
them out). Anything else the service sends is kept in ``extra`` so new remote
fields survive hydration. Nothing here is computed except ``FilePath`` on
records that carry a ``FileName``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

IMAGE_URL = "https://shop{shop_id}.{asset_host}/upload_dir/shop/"

E = TypeVar("E", bound="Entity")


def image_prefix(shop_id, asset_host: str = "hstatic.dk") -> str:
    return IMAGE_URL.format(shop_id=shop_id, asset_host=asset_host)


class Entity:
    FIELDS: Tuple[str, ...] = ()

    def __init__(self, **data: Any) -> None:
        self.extra: Dict[str, Any] = {}
        for name in self.FIELDS:
            setattr(self, name, None)
        for key, value in data.items():
            if key in self.FIELDS:
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def __getitem__(self, key: str) -> Any:
        if key in self.FIELDS:
            return getattr(self, key)
        return self.extra[key]

    def __contains__(self, key: str) -> bool:
        return key in self.FIELDS or key in self.extra

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} Id={getattr(self, 'Id', None)!r}>"

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self.FIELDS}
        data.update(self.extra)
        return data


class User(Entity):
    FIELDS = ("Id", "Firstname", "Lastname", "Email")


class Order(Entity):
    FIELDS = (
        "Currency", "CurrencyId", "Customer", "CustomerComment", "CustomerId",
        "DateDelivered", "DateDue", "DateSent", "DateUpdated", "Delivery",
        "DeliveryComment", "DeliveryId", "DeliveryTime", "DiscountCodes", "Id",
        "InvoiceNumber", "LanguageISO", "OrderComment", "OrderCommentExternal",
        "OrderLines", "Origin", "Packing", "PackingId", "Payment", "PaymentId",
        "ReferenceNumber", "Site", "Status", "Total", "TrackingCode",
        "Transactions", "User", "UserId", "Vat",
    )


class OrderLine(Entity):
    FIELDS = ("Id", "OrderId", "ProductId", "ProductTitle", "Amount", "Price", "Vat")


class Product(Entity):
    FIELDS = ("Id", "Ean", "Price", "BuyingPrice", "CategoryId", "Title")


class Category(Entity):
    FIELDS = ("Id", "Title", "ParentId")


class Delivery(Entity):
    FIELDS = ("Id", "Title", "Price")


class ProductImage(Entity):
    FIELDS = ("Id", "ProductId", "FileName", "Sorting", "FilePath")


def hydrate(cls: Type[E], record: Mapping[str, Any], prefix: Optional[str] = None) -> E:
    """Copy ``record`` onto a new ``cls``; set ``FilePath`` when ``prefix`` is given."""
    data = dict(record)
    if prefix is not None and data.get("FileName"):
        data["FilePath"] = prefix + data["FileName"]
    return cls(**data)
