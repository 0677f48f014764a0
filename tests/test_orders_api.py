import pytest


@pytest.fixture
def converted(client, seller_headers, create_lead, add_item):
    lead = create_lead(remarks={"obs": "urgente"})
    add_item(lead["id"])
    add_item(lead["id"], productId=123457, quantity=2, price=12.5, ipi=1.5)
    resp = client.post(f"/leads/{lead['id']}/convert", headers=seller_headers)
    return lead, resp.get_json()["data"]


def test_seller_reads_own_order(client, seller_headers, converted):
    lead, result = converted
    resp = client.get(f"/orders/{result['orderId']}", headers=seller_headers)
    assert resp.status_code == 200
    order = resp.get_json()["data"]
    assert order["id"] == result["orderId"]
    assert order["leadId"] == lead["id"]
    assert order["orderWeb"] == result["orderWeb"]
    assert order["customer"]["id"] == 701546
    assert order["transporter"] == {"id": 9, "name": "Retira"}
    assert order["subtotal"] == 1525.0
    assert order["totalIPI"] == 1.5
    assert order["total"] == 1526.5
    assert order["remarks"]["obs"] == "urgente"
    assert [i["productId"] for i in order["items"]] == [123456, 123457]
    assert order["items"][1]["subtotal"] == 25.0


def test_order_access_rules(client, other_headers, manager_headers, converted):
    _, result = converted
    resp = client.get(f"/orders/{result['orderId']}", headers=other_headers)
    assert resp.status_code == 403
    assert client.get(f"/orders/{result['orderId']}", headers=manager_headers).status_code == 200


def test_order_not_found_and_invalid_id(client, seller_headers):
    resp = client.get("/orders/987654", headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "ORDER_NOT_FOUND"
    resp = client.get("/orders/x1", headers=seller_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_ID"
