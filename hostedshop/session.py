"""SOAP session against the HostedShop service.

HostedShop keeps the login in a server side PHP session, so every call after
``Solution_Connect`` must go out on the same cookie jar. The zeep client is
therefore built on one ``requests.Session`` that lives as long as the
``Session`` object.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests
from zeep import Client, Settings
from zeep.exceptions import Error as ZeepError
from zeep.helpers import serialize_object
from zeep.transports import Transport

from .errors import RemoteCallError, ShopConnectionError

WSDL_URL = "https://api.hostedshop.dk/service.wsdl"

SECRET_ARGS = {"Password"}


def _masked(args: Dict[str, Any]) -> Dict[str, Any]:
    return {k: "***" if k in SECRET_ARGS else v for k, v in args.items()}


class Session:
    """Connection handle with a single capability: ``invoke``."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def invoke(self, procedure: str, args: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call ``procedure`` and return the raw envelope.

        The envelope is a plain dict holding ``<procedure>Result``. zeep
        unwraps single part responses, so those are put back under that key.
        """
        args = dict(args or {})
        start = time.monotonic()
        try:
            operation = getattr(self.client.service, procedure)
        except AttributeError as e:  # not in the WSDL
            raise RemoteCallError(procedure, e) from e
        try:
            result = operation(**args)
        except (ZeepError, requests.RequestException) as e:
            latency = (time.monotonic() - start) * 1000
            logging.info("HS %s %s failed %.1fms", procedure, _masked(args), latency)
            raise RemoteCallError(procedure, e) from e
        latency = (time.monotonic() - start) * 1000
        logging.info("HS %s %s %.1fms", procedure, _masked(args), latency)

        key = f"{procedure}Result"
        payload = serialize_object(result, dict)
        if isinstance(payload, dict) and key in payload:
            return payload
        return {key: payload}


def http_session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"Accept": "text/xml"})
    return s


def connect(
    username: str,
    password: str,
    wsdl: str = WSDL_URL,
    timeout: int = 10,
    client_factory: Callable[..., Any] = Client,
) -> Session:
    """Load the WSDL and log in. Raises ``ShopConnectionError`` on any failure."""
    transport = Transport(session=http_session(), timeout=timeout, operation_timeout=timeout)
    try:
        client = client_factory(
            wsdl,
            transport=transport,
            settings=Settings(strict=False, xml_huge_tree=True),
        )
    except (ZeepError, requests.RequestException, OSError) as e:
        raise ShopConnectionError(f"could not load {wsdl}: {e}") from e

    session = Session(client)
    try:
        envelope = session.invoke(
            "Solution_Connect", {"Username": username, "Password": password}
        )
    except RemoteCallError as e:
        raise ShopConnectionError(f"login rejected for {username!r}: {e.cause}") from e
    if envelope.get("Solution_ConnectResult") is False:
        raise ShopConnectionError(f"login rejected for {username!r}")
    logging.info("HS connected as %s via %s", username, wsdl)
    return session
