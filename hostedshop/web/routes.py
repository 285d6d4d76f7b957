# hostedshop/web/routes.py
"""Read-only JSON views over the HostedShop client."""

from flask import Blueprint, abort, current_app, jsonify, request

from hostedshop.client import DEFAULT_STATUS
from hostedshop.ranges import as_date

bp = Blueprint('shop', __name__)


def shop_client():
    client = current_app.extensions.get('hostedshop')
    if client is None:
        from hostedshop import create_client

        client = create_client(current_app.config.get('ENV'))
        current_app.extensions['hostedshop'] = client
    return client


def _refresh() -> bool:
    return request.args.get('refresh', '').lower() in ('1', 'true', 'yes')


@bp.route('/users')
def users():
    rows = shop_client().get_users(use_cache=not _refresh())
    return jsonify([u.to_dict() for u in rows.values()])


@bp.route('/orders')
def recent_orders():
    days = request.args.get('days', 1, type=int)
    rows = shop_client().get_orders(use_cache=not _refresh(), days=days)
    return jsonify([o.to_dict() for o in rows])


@bp.route('/orders/since/<start>')
def orders_since(start):
    """Orders placed since ``start`` (YYYY-MM-DD), fetched month by month."""
    try:
        since = as_date(start)
    except ValueError:
        abort(400, description=f'invalid start date {start!r}')
    status = request.args.get('status') or DEFAULT_STATUS
    rows = shop_client().fetch_orders_from(since, status)
    return jsonify([o.to_dict() for o in rows])


@bp.route('/orders/<int:order_id>')
def order_detail(order_id):
    return jsonify(shop_client().get_order(order_id).to_dict())


@bp.route('/products/search')
def product_search():
    q = request.args.get('q', '').strip()
    if not q:
        return jsonify([])
    return jsonify([p.to_dict() for p in shop_client().search_products(q)])


@bp.route('/products/<int:product_id>')
def product_detail(product_id):
    product = shop_client().get_product(product_id)
    if product is None:
        abort(404)
    return jsonify(product.to_dict())


@bp.route('/products/<int:product_id>/images')
def product_images(product_id):
    return jsonify([i.to_dict() for i in shop_client().get_product_images(product_id)])
