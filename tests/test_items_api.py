def test_add_item_and_totals(client, seller_headers, create_lead, add_item):
    lead = create_lead()
    item = add_item(lead["id"])
    assert item["productId"] == 123456
    assert item["quantity"] == 10
    assert item["price"] == 150.0
    assert item["consumerPrice"] == 150.0
    assert item["originalPrice"] == 199.9
    assert item["subtotal"] == 1500.0
    assert item["product"]["model"] == "BX2"

    resp = client.get(f"/leads/{lead['id']}/totals", headers=seller_headers)
    assert resp.status_code == 200
    totals = resp.get_json()["data"]
    assert totals["subtotal"] == 1500.0
    assert totals["itemCount"] == 1
    assert totals["grandTotal"] == 1500.0
    assert totals["profitability"] is None


def test_original_price_always_comes_from_product(create_lead, add_item):
    lead = create_lead()
    item = add_item(lead["id"], originalPrice=1.0)
    assert item["originalPrice"] == 199.9


def test_totals_include_freight_and_taxes(client, seller_headers, create_lead, add_item):
    lead = create_lead(freight=50)
    add_item(lead["id"], ipi=12.5, st=3.25)
    add_item(lead["id"], productId=123457, quantity=4, price=12.5)
    totals = client.get(f"/leads/{lead['id']}/totals", headers=seller_headers).get_json()["data"]
    assert totals["subtotal"] == 1550.0
    assert totals["totalIPI"] == 12.5
    assert totals["totalST"] == 3.25
    assert totals["freight"] == 50.0
    assert totals["grandTotal"] == 1615.75


def test_list_items(client, seller_headers, create_lead, add_item):
    lead = create_lead()
    first = add_item(lead["id"])
    second = add_item(lead["id"], productId=123457, quantity=1, price=12.5)
    resp = client.get(f"/leads/{lead['id']}/items", headers=seller_headers)
    assert resp.status_code == 200
    assert [i["id"] for i in resp.get_json()["data"]] == [first["id"], second["id"]]


def test_add_item_validation(client, seller_headers, create_lead):
    lead = create_lead()
    resp = client.post(f"/leads/{lead['id']}/items", json={"productId": 123456, "quantity": 0, "price": -1},
                       headers=seller_headers)
    assert resp.status_code == 400
    fields = {d["field"] for d in resp.get_json()["error"]["details"]}
    assert fields == {"quantity", "price"}


def test_add_item_unknown_product(client, seller_headers, create_lead):
    lead = create_lead()
    resp = client.post(f"/leads/{lead['id']}/items", json={"productId": 999, "quantity": 1, "price": 1},
                       headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "PRODUCT_NOT_FOUND"


def test_add_item_to_missing_lead(client, seller_headers):
    resp = client.post("/leads/424242/items", json={"productId": 123456, "quantity": 1, "price": 1},
                       headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "LEAD_NOT_FOUND"


def test_update_item(client, seller_headers, create_lead, add_item):
    lead = create_lead()
    item = add_item(lead["id"])
    resp = client.put(f"/leads/{lead['id']}/items/{item['id']}", json={"quantity": 2, "consumerPrice": 180},
                      headers=seller_headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["quantity"] == 2
    assert data["price"] == 150.0
    assert data["consumerPrice"] == 180.0
    assert data["subtotal"] == 300.0


def test_item_of_another_lead_is_not_found(client, seller_headers, create_lead, add_item):
    lead_a = create_lead()
    lead_b = create_lead()
    item = add_item(lead_a["id"])

    resp = client.put(f"/leads/{lead_b['id']}/items/{item['id']}", json={"quantity": 1}, headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "ITEM_NOT_FOUND"

    resp = client.delete(f"/leads/{lead_b['id']}/items/{item['id']}", headers=seller_headers)
    assert resp.status_code == 404

    items = client.get(f"/leads/{lead_a['id']}/items", headers=seller_headers).get_json()["data"]
    assert items[0]["quantity"] == 10


def test_remove_item(client, seller_headers, create_lead, add_item):
    lead = create_lead()
    item = add_item(lead["id"])
    resp = client.delete(f"/leads/{lead['id']}/items/{item['id']}", headers=seller_headers)
    assert resp.status_code == 200
    assert client.get(f"/leads/{lead['id']}/items", headers=seller_headers).get_json()["data"] == []


def test_items_of_converted_lead_are_frozen(client, seller_headers, create_lead, add_item):
    lead = create_lead()
    item = add_item(lead["id"])
    assert client.post(f"/leads/{lead['id']}/convert", headers=seller_headers).status_code == 200

    resp = client.post(f"/leads/{lead['id']}/items", json={"productId": 123456, "quantity": 1, "price": 1},
                       headers=seller_headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "LEAD_ALREADY_CONVERTED"
    resp = client.put(f"/leads/{lead['id']}/items/{item['id']}", json={"quantity": 1}, headers=seller_headers)
    assert resp.status_code == 409
    resp = client.put(f"/leads/{lead['id']}", json={"freight": 1}, headers=seller_headers)
    assert resp.status_code == 409
    resp = client.delete(f"/leads/{lead['id']}", headers=seller_headers)
    assert resp.status_code == 409


def test_other_seller_cannot_add_items(client, other_headers, create_lead):
    lead = create_lead()
    resp = client.post(f"/leads/{lead['id']}/items", json={"productId": 123456, "quantity": 1, "price": 1},
                       headers=other_headers)
    assert resp.status_code == 403


def test_reseller_lead_totals_include_profitability(client, seller_headers, session_factory, create_lead, add_item):
    from leads_agent.repo.models import Lead
    lead = create_lead(paymentType=5)
    add_item(lead["id"], consumerPrice=200)
    with session_factory() as s, s.begin():
        s.get(Lead, lead["id"]).reseller_id = 77

    totals = client.get(f"/leads/{lead['id']}/totals", headers=seller_headers).get_json()["data"]
    assert totals["consumerGrandTotal"] == 2000.0
    assert totals["profitability"]["descFP"] == 70.0
    assert totals["profitability"]["commission"] == 345.0


def test_item_writes_lock_the_lead_row(client, seller_headers, monkeypatch, create_lead, add_item):
    from sqlalchemy.dialects import mysql
    from leads_agent.repo import leads as lead_repo

    sql = str(lead_repo.select_lead(1, for_update=True).compile(dialect=mysql.dialect()))
    assert sql.rstrip().endswith("FOR UPDATE")

    lead = create_lead()
    item = add_item(lead["id"])
    locks = []
    find = lead_repo.find_by_id

    def spy(s, lead_id, for_update=False):
        locks.append(for_update)
        return find(s, lead_id, for_update=for_update)

    monkeypatch.setattr(lead_repo, "find_by_id", spy)
    add_item(lead["id"], quantity=1)
    client.put(f"/leads/{lead['id']}/items/{item['id']}", json={"quantity": 3}, headers=seller_headers)
    client.delete(f"/leads/{lead['id']}/items/{item['id']}", headers=seller_headers)
    client.get(f"/leads/{lead['id']}/items", headers=seller_headers)
    assert locks == [True, True, True, False]
