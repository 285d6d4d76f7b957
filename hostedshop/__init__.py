import logging

from flask import Flask, jsonify

from .client import HostedShopClient
from .config import get_config
from .errors import (
    EmptyResultError,
    HostedShopError,
    MalformedResponseError,
    RemoteCallError,
    ResultTypeError,
    ShopConnectionError,
)
from .models import image_prefix
from .session import Session, connect

__all__ = [
    'create_app',
    'create_client',
    'connect',
    'Session',
    'HostedShopClient',
    'HostedShopError',
    'ShopConnectionError',
    'RemoteCallError',
    'EmptyResultError',
    'MalformedResponseError',
    'ResultTypeError',
]


def create_client(config_name: str | None = None) -> HostedShopClient:
    """Connect with credentials from the environment and return a ready client."""
    cfg = get_config(config_name)
    logging.basicConfig(level=logging.DEBUG if cfg.DEBUG else logging.INFO)

    if not cfg.HOSTEDSHOP_USER or not cfg.HOSTEDSHOP_PASS:
        raise ShopConnectionError('HOSTEDSHOP_USER and HOSTEDSHOP_PASS must be set')
    session = connect(
        cfg.HOSTEDSHOP_USER,
        cfg.HOSTEDSHOP_PASS,
        wsdl=cfg.HOSTEDSHOP_WSDL,
        timeout=cfg.HOSTEDSHOP_TIMEOUT,
    )
    return HostedShopClient(
        session,
        image_prefix=image_prefix(cfg.HOSTEDSHOP_SHOP_ID, cfg.HOSTEDSHOP_ASSET_HOST),
        apply_default_fields=cfg.HOSTEDSHOP_APPLY_DEFAULT_FIELDS,
    )


def create_app(config_name: str | None = None, client: HostedShopClient | None = None) -> Flask:
    """JSON app around one client. Without ``client`` it connects on first request."""
    app = Flask(__name__)
    cfg_cls = get_config(config_name)
    app.config.from_object(cfg_cls)

    # Initialise logging
    logging.basicConfig(level=logging.DEBUG if app.debug else logging.INFO)

    if client is not None:
        app.extensions['hostedshop'] = client

    @app.errorhandler(EmptyResultError)
    def not_found(e):
        return jsonify(error=str(e)), 404

    @app.errorhandler(RemoteCallError)
    def remote_failed(e):
        logging.exception('remote call %s failed', e.procedure)
        return jsonify(error=str(e), procedure=e.procedure), 502

    @app.errorhandler(MalformedResponseError)
    @app.errorhandler(ResultTypeError)
    def unexpected_shape(e):
        logging.exception('unexpected response from %s', e.procedure)
        return jsonify(error=str(e), procedure=e.procedure), 502

    @app.errorhandler(ShopConnectionError)
    def not_connected(e):
        logging.exception('could not connect to HostedShop')
        return jsonify(error=str(e)), 503

    from hostedshop.web.routes import bp as shop_bp

    app.register_blueprint(shop_bp, url_prefix='/shop')

    return app
