"""Turn raw HostedShop envelopes into one of three result shapes.

The service answers with ``<procedure>Result`` holding either a boolean, a
single record, or a collection. Collections usually come wrapped as
``{"item": [...]}`` but a one element collection may arrive as
``{"item": {...}}`` and single-result calls often skip the wrapper entirely.
Classification looks only at the value received, never at the procedure
name; the caller picks the accessor that matches what it asked for.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from .errors import EmptyResultError, MalformedResponseError, ResultTypeError

BOOL = "bool"
RECORD = "record"
SEQUENCE = "sequence"

COLLECTION_KEY = "item"


class Result:
    """Normalized payload of one call: a bool, a record or a list of records."""

    def __init__(self, procedure: str, kind: str, value: Any) -> None:
        self.procedure = procedure
        self.kind = kind
        self.value = value

    def __repr__(self) -> str:
        return f"Result({self.procedure!r}, {self.kind!r}, {self.value!r})"

    def as_bool(self) -> bool:
        if self.kind != BOOL:
            raise ResultTypeError(self.procedure, BOOL, self.kind)
        return self.value

    def as_record(self) -> Dict[str, Any]:
        if self.kind == RECORD:
            return self.value
        if self.kind == SEQUENCE:
            if not self.value:
                raise EmptyResultError(self.procedure)
            if len(self.value) > 1:
                raise ResultTypeError(
                    self.procedure, RECORD, f"{SEQUENCE} of {len(self.value)}"
                )
            return self.value[0]
        raise ResultTypeError(self.procedure, RECORD, self.kind)

    def as_sequence(self) -> List[Dict[str, Any]]:
        if self.kind == SEQUENCE:
            return self.value
        if self.kind == RECORD:
            return [self.value]
        raise ResultTypeError(self.procedure, SEQUENCE, self.kind)


def _records(procedure: str, items: Any) -> List[Dict[str, Any]]:
    if items is None:
        return []
    if isinstance(items, Mapping):
        return [dict(items)]
    out = []
    for item in items:
        if not isinstance(item, Mapping):
            raise MalformedResponseError(
                procedure, f"collection holds a {type(item).__name__}"
            )
        out.append(dict(item))
    return out


def normalize(procedure: str, envelope: Any) -> Result:
    key = f"{procedure}Result"
    if not isinstance(envelope, Mapping) or key not in envelope:
        raise MalformedResponseError(procedure, f"envelope has no {key!r}")
    value = envelope[key]

    if isinstance(value, bool):
        return Result(procedure, BOOL, value)
    if value is None or isinstance(value, (list, tuple)):
        return Result(procedure, SEQUENCE, _records(procedure, value))
    if isinstance(value, Mapping):
        if set(value) == {COLLECTION_KEY}:
            return Result(procedure, SEQUENCE, _records(procedure, value[COLLECTION_KEY]))
        return Result(procedure, RECORD, dict(value))
    raise MalformedResponseError(
        procedure, f"unexpected {type(value).__name__} payload"
    )
