import logging

from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.main import create_app
from product_catalog_api.app.services.product_store import ProductStore

URL = "/api/products"


def _create(client, headers, **fields):
    payload = {"name": "Widget", "price": 5, "category": "tools"}
    payload.update(fields)
    response = client.post(URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_root_greeting(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Hello World! Server is running smoothly."


def test_health_reports_count(client, auth_headers):
    _create(client, auth_headers)
    assert client.get("/health").json() == {"status": "ok", "products": 1}


def test_create_returns_201_with_id(client, auth_headers):
    body = _create(client, auth_headers, description="blue", inStock=False)
    assert body == {
        "id": "p1",
        "name": "Widget",
        "description": "blue",
        "price": 5,
        "category": "tools",
        "inStock": False,
    }


def test_create_requires_token(client):
    response = client.post(URL, json={"name": "Widget", "price": 5, "category": "tools"})
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_create_rejects_unknown_token(client):
    response = client.post(
        URL,
        json={"name": "Widget", "price": 5, "category": "tools"},
        headers={"Authorization": "Bearer nope"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_writes_rejected_when_no_tokens_configured():
    client = TestClient(create_app(Settings(api_tokens="")))
    response = client.post(
        URL,
        json={"name": "Widget", "price": 5, "category": "tools"},
        headers={"Authorization": "Bearer anything"},
    )
    assert response.status_code == 401


def test_create_validation_lists_all_fields(client, auth_headers):
    response = client.post(URL, json={"price": -1}, headers=auth_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {d["field"] for d in body["details"]} == {"name", "price", "category"}


def test_create_without_body(client, auth_headers):
    response = client.post(URL, headers=auth_headers)
    assert response.status_code == 400


def test_malformed_json_is_bad_request(client, auth_headers):
    headers = dict(auth_headers, **{"Content-Type": "application/json"})
    response = client.post(URL, content="{not json", headers=headers)
    assert response.status_code == 400


def test_get_by_id(client, auth_headers):
    created = _create(client, auth_headers)
    response = client.get(f"{URL}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_is_404(client):
    response = client.get(f"{URL}/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_list_with_filter_and_pagination(client, auth_headers):
    for i in range(10):
        _create(client, auth_headers, name=f"item-{i}", category="even" if i % 2 == 0 else "odd")
    response = client.get(URL, params={"category": "even", "page": "2", "limit": "2"})
    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 2
    assert body["limit"] == 2
    assert body["total"] == 5
    assert [p["name"] for p in body["products"]] == ["item-4", "item-6"]


def test_list_defaults(client, auth_headers):
    for name in ["A", "B", "C"]:
        _create(client, auth_headers, name=name)
    body = client.get(URL).json()
    assert (body["page"], body["limit"], body["total"]) == (1, 3, 3)
    assert [p["name"] for p in body["products"]] == ["A", "B", "C"]


def test_list_clamps_bad_page_values(client, auth_headers):
    for name in ["A", "B", "C"]:
        _create(client, auth_headers, name=name)
    body = client.get(URL, params={"page": "-1", "limit": "0"}).json()
    assert (body["page"], body["limit"]) == (1, 3)
    assert len(body["products"]) == 3


def test_stats_route_not_captured_by_id(client, auth_headers):
    for category in ["a", "a", "b"]:
        _create(client, auth_headers, category=category)
    response = client.get(f"{URL}/stats")
    assert response.status_code == 200
    assert response.json() == {"a": 2, "b": 1}


def test_stats_empty(client):
    assert client.get(f"{URL}/stats").json() == {}


def test_search_by_name(client, auth_headers):
    for name in ["Widget", "gadget", "WIDGET-X"]:
        _create(client, auth_headers, name=name)
    response = client.get(f"{URL}/search/name", params={"q": "widget"})
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Widget", "WIDGET-X"]


def test_search_requires_q(client):
    response = client.get(f"{URL}/search/name")
    assert response.status_code == 400
    assert response.json() == {"error": "Query parameter 'q' is required"}


def test_update_merges_and_protects_id(client, auth_headers):
    created = _create(client, auth_headers, name="A", category="x", inStock=True)
    response = client.put(f"{URL}/{created['id']}", json={"price": 9, "id": "hijack"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body == dict(created, price=9)
    assert client.get(f"{URL}/hijack").status_code == 404


def test_update_invalid_payload_changes_nothing(client, auth_headers):
    created = _create(client, auth_headers)
    response = client.put(f"{URL}/{created['id']}", json={"name": "New", "price": -2}, headers=auth_headers)
    assert response.status_code == 400
    assert client.get(f"{URL}/{created['id']}").json() == created


def test_update_unknown_is_404(client, auth_headers):
    response = client.put(f"{URL}/missing", json={"price": 1}, headers=auth_headers)
    assert response.status_code == 404


def test_update_requires_token(client, auth_headers):
    created = _create(client, auth_headers)
    response = client.put(f"{URL}/{created['id']}", json={"price": 1})
    assert response.status_code == 401


def test_delete_then_delete_again(client, auth_headers):
    first = _create(client, auth_headers, name="A")
    _create(client, auth_headers, name="B")
    response = client.delete(f"{URL}/{first['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted"}
    assert client.get(f"{URL}/{first['id']}").status_code == 404
    assert client.delete(f"{URL}/{first['id']}", headers=auth_headers).status_code == 404
    assert [p["name"] for p in client.get(URL).json()["products"]] == ["B"]


def test_delete_requires_token(client, auth_headers):
    created = _create(client, auth_headers)
    assert client.delete(f"{URL}/{created['id']}").status_code == 401
    assert client.get(f"{URL}/{created['id']}").status_code == 200


def test_requests_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="product_catalog_api.requests")
    client.get(f"{URL}/missing")
    assert any("GET /api/products/missing -> 404" in r.getMessage() for r in caplog.records)


def test_non_ascii_token_is_rejected_not_crashing(app):
    client = TestClient(app, raise_server_exceptions=False)
    response = client.post(
        URL,
        json={"name": "Widget", "price": 5, "category": "tools"},
        headers={"Authorization": "Bearer tést".encode("latin-1")},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


class _BrokenStore(ProductStore):
    def list_all(self):
        raise RuntimeError("store exploded")


def test_unexpected_error_is_500_and_logged(caplog):
    caplog.set_level(logging.INFO)
    client = TestClient(create_app(Settings(api_tokens="t"), store=_BrokenStore()), raise_server_exceptions=False)
    response = client.get(URL)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    errors = [r for r in caplog.records if r.name == "product_catalog_api.app.core.errors"]
    assert errors and errors[0].levelno == logging.ERROR
    assert errors[0].exc_info is not None
    assert "store exploded" in errors[0].getMessage()
    assert any("GET /api/products -> 500" in r.getMessage() for r in caplog.records)


def test_price_keeps_its_number_type(client, auth_headers):
    whole = _create(client, auth_headers, price=5)
    fractional = _create(client, auth_headers, price=9.99)
    assert whole["price"] == 5 and isinstance(whole["price"], int)
    assert fractional["price"] == 9.99
    updated = client.put(f"{URL}/{whole['id']}", json={"price": 9}, headers=auth_headers).json()
    assert isinstance(updated["price"], int)
