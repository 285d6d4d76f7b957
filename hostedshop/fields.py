"""Field projection: which fields the service fills in per entity type."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List

from .normalizer import Result

# Declared by every new client so user and order lookups carry what callers need
DEFAULT_FIELDS = {
    "User": ["Id", "Firstname", "Lastname", "Email"],
    "Order": ["Id", "OrderLines", "CustomerId"],
    "Product": ["Id", "Ean", "Price", "BuyingPrice", "CategoryId", "Title"],
}

SPECIAL_PROCEDURES = {"OrderLine": "Order_SetOrderLineFields"}


def canonical_field(name: str) -> str:
    """``orderlines`` -> ``Orderlines``; only the first letter is touched."""
    return name[:1].upper() + name[1:]


def set_fields_procedure(entity_type: str) -> str:
    entity_type = canonical_field(entity_type)
    return SPECIAL_PROCEDURES.get(entity_type, f"{entity_type}_SetFields")


class FieldProjector:
    """Keeps and applies the per-entity field declarations of one session.

    ``call`` is the owning client's ``call(procedure, args) -> Result``. The
    service signals a rejected field list with ``false``; that is returned to
    the caller as is, never raised.
    """

    def __init__(self, call: Callable[[str, Dict[str, Any]], Result]) -> None:
        self._call = call
        self.projections: Dict[str, List[str]] = {}

    def set_fields(self, entity_type: str, field_names: Iterable[str]) -> bool:
        fields = list(dict.fromkeys(canonical_field(f) for f in field_names))
        procedure = set_fields_procedure(entity_type)
        ok = self._call(procedure, {"Fields": ",".join(fields)}).as_bool()
        if ok:
            self.projections[canonical_field(entity_type)] = fields
        else:
            logging.warning("%s rejected fields %s", procedure, ",".join(fields))
        return ok

    def reapply(self) -> Dict[str, bool]:
        """Send every remembered declaration again, e.g. after a reconnect."""
        return {
            entity: self.set_fields(entity, fields)
            for entity, fields in list(self.projections.items())
        }
