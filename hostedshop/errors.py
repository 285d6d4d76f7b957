"""Exceptions raised by the HostedShop client."""
from __future__ import annotations

import builtins


class HostedShopError(Exception):
    """Base class for every error raised by this package."""


class ShopConnectionError(HostedShopError, builtins.ConnectionError):
    """The WSDL could not be loaded or the login handshake was rejected."""


class RemoteCallError(HostedShopError):
    """A single procedure call failed in transport or on the remote side."""

    def __init__(self, procedure: str, cause: BaseException) -> None:
        self.procedure = procedure
        self.cause = cause
        super().__init__(f"{procedure} failed: {type(cause).__name__}: {cause}")


class MalformedResponseError(HostedShopError):
    """The envelope does not carry a usable ``<procedure>Result``."""

    def __init__(self, procedure: str, reason: str) -> None:
        self.procedure = procedure
        self.reason = reason
        super().__init__(f"{procedure}: {reason}")


class EmptyResultError(HostedShopError, LookupError):
    """A single record was requested but the result was an empty collection."""

    def __init__(self, procedure: str) -> None:
        self.procedure = procedure
        super().__init__(f"{procedure} returned no records")


class ResultTypeError(HostedShopError, TypeError):
    """The result was read through an accessor that does not match its shape."""

    def __init__(self, procedure: str, expected: str, actual: str) -> None:
        self.procedure = procedure
        self.expected = expected
        self.actual = actual
        super().__init__(f"{procedure} returned a {actual}, not a {expected}")
