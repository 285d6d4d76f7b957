import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hostedshop import create_app
from hostedshop.client import HostedShopClient
from hostedshop.errors import RemoteCallError


class FakeSession:
    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def invoke(self, procedure, args=None):
        self.calls.append((procedure, args))
        value = self.results.get(procedure, True)
        if isinstance(value, Exception):
            raise RemoteCallError(procedure, value)
        return {f"{procedure}Result": value}


def setup_app(results=None):
    session = FakeSession(results)
    client = HostedShopClient(session, apply_default_fields=False)
    app = create_app('development', client=client)
    return app.test_client(), session


def test_users_listing_uses_cache_unless_refreshed():
    http, session = setup_app({"User_GetAll": {"item": [{"Id": 1, "Email": "a@x.dk"}]}})
    assert http.get('/shop/users').get_json() == [
        {"Id": 1, "Firstname": None, "Lastname": None, "Email": "a@x.dk"}
    ]
    http.get('/shop/users')
    http.get('/shop/users?refresh=1')
    assert [c[0] for c in session.calls] == ["User_GetAll", "User_GetAll"]


def test_product_detail_and_missing_product():
    http, _ = setup_app({"Product_GetById": {"Id": 5, "Title": "Mug"}})
    resp = http.get('/shop/products/5')
    assert resp.status_code == 200
    assert resp.get_json()["Title"] == "Mug"

    http, _ = setup_app({"Product_GetById": False})
    assert http.get('/shop/products/5').status_code == 404


def test_product_images_have_paths():
    http, _ = setup_app({"Product_GetPictures": {"item": {"Id": 1, "FileName": "a.jpg"}}})
    data = http.get('/shop/products/5/images').get_json()
    assert data[0]["FilePath"].endswith("/upload_dir/shop/a.jpg")


def test_search_requires_term():
    http, session = setup_app({"Product_Search": {"item": [{"Id": 1}]}})
    assert http.get('/shop/products/search').get_json() == []
    assert session.calls == []
    assert len(http.get('/shop/products/search?q=mug').get_json()) == 1


def test_orders_since_rejects_bad_date():
    http, session = setup_app()
    assert http.get('/shop/orders/since/yesterday').status_code == 400
    assert session.calls == []


def test_missing_order_is_404():
    http, _ = setup_app({"Order_GetById": None})
    resp = http.get('/shop/orders/12')
    assert resp.status_code == 404
    assert "Order_GetById" in resp.get_json()["error"]


def test_remote_failure_is_502():
    http, _ = setup_app({"Order_GetByDate": OSError("timed out")})
    resp = http.get('/shop/orders')
    assert resp.status_code == 502
    assert resp.get_json()["procedure"] == "Order_GetByDate"


def test_several_products_for_one_id_is_502():
    http, _ = setup_app({"Product_GetById": {"item": [{"Id": 5}, {"Id": 6}]}})
    resp = http.get('/shop/products/5')
    assert resp.status_code == 502
    assert resp.get_json()["procedure"] == "Product_GetById"


def test_malformed_payload_is_502():
    http, _ = setup_app({"Order_GetById": 17})
    resp = http.get('/shop/orders/3')
    assert resp.status_code == 502
    assert resp.get_json()["procedure"] == "Order_GetById"
