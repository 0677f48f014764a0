from conftest import make_token


def test_create_lead_defaults(client, seller_headers):
    resp = client.post("/leads", json={"customerId": 701546, "userId": 1}, headers=seller_headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    lead = body["data"]
    assert lead["type"] == 1
    assert lead["orderWeb"] is None
    assert lead["sellerId"] == 1
    assert lead["cNatOp"] == 27
    assert lead["cTransporter"] == 9
    assert lead["paymentType"] == 2
    assert lead["paymentTerms"] == "n:30:30"
    assert lead["cLogUnity"] == lead["cEmitUnity"] == 1
    assert lead["freight"] == 0
    assert lead["segment"] == 1
    assert lead["customer"]["name"] == "Cliente Teste Ltda"


def test_create_then_fetch_round_trip(client, seller_headers, create_lead):
    lead = create_lead(freight=25.5, paymentTerms="n:28:56")
    resp = client.get(f"/leads/{lead['id']}", headers=seller_headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["customerId"] == 701546
    assert data["freight"] == 25.5
    assert data["paymentTerms"] == "n:28:56"


def test_numeric_payment_terms_resolve_to_term_string(create_lead):
    lead = create_lead(paymentTerms=2)
    assert lead["vPaymentTerms"] == 2
    assert lead["paymentTerms"] == "n:28:56"


def test_segment_slug_and_explicit_seller(create_lead):
    lead = create_lead(sellerId=2, cSegment="auto")
    assert lead["sellerId"] == 2
    assert lead["segment"] == 5
    lead = create_lead(sellerId=2)
    assert lead["segment"] == 2


def test_create_collects_all_validation_errors(client, seller_headers):
    resp = client.post("/leads", json={"freight": -1, "bogus": True}, headers=seller_headers)
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {d["field"] for d in error["details"]}
    assert {"customerId", "userId", "freight", "bogus"} <= fields


def test_update_negative_freight_is_rejected(client, seller_headers, create_lead):
    lead = create_lead()
    resp = client.put(f"/leads/{lead['id']}", json={"freight": -5}, headers=seller_headers)
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert [d["field"] for d in error["details"]] == ["freight"]


def test_update_writes_only_sent_fields(client, seller_headers, create_lead):
    lead = create_lead(buyer="Maria", remarks={"obs": "original"})
    resp = client.put(
        f"/leads/{lead['id']}",
        json={"freight": 80, "remarks": {"finance": "à vista"}},
        headers=seller_headers,
    )
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["freight"] == 80
    assert data["buyer"] == "Maria"
    assert data["remarks"]["finance"] == "à vista"
    assert data["remarks"]["obs"] == "original"
    assert data["paymentTerms"] == "n:30:30"


def test_update_missing_lead_is_404(client, seller_headers):
    resp = client.put("/leads/999999", json={"freight": 1}, headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "LEAD_NOT_FOUND"


def test_invalid_id_is_400(client, seller_headers):
    resp = client.get("/leads/abc", headers=seller_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_ID"


def test_other_seller_cannot_read_lead(client, other_headers, manager_headers, create_lead):
    lead = create_lead()
    resp = client.get(f"/leads/{lead['id']}", headers=other_headers)
    assert resp.status_code == 403
    assert resp.get_json()["error"]["code"] == "FORBIDDEN"
    assert client.get(f"/leads/{lead['id']}", headers=manager_headers).status_code == 200


def test_seller_can_read_lead_where_they_are_seller(client, other_headers, create_lead):
    lead = create_lead(sellerId=2)
    assert client.get(f"/leads/{lead['id']}", headers=other_headers).status_code == 200


def test_soft_deleted_lead_is_not_found(client, seller_headers, create_lead):
    lead = create_lead()
    resp = client.delete(f"/leads/{lead['id']}", headers=seller_headers)
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True
    resp = client.get(f"/leads/{lead['id']}", headers=seller_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "LEAD_NOT_FOUND"
    assert client.delete(f"/leads/{lead['id']}", headers=seller_headers).status_code == 404


def test_missing_token_is_401(client):
    resp = client.get("/leads")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "TOKEN_REQUIRED"


def test_invalid_and_expired_tokens(client):
    resp = client.get("/leads", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.get_json()["error"]["code"] == "TOKEN_INVALID"
    expired = make_token({"userId": 1, "level": 1}, expires_in=-60)
    resp = client.get("/leads", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "TOKEN_EXPIRED"


def test_list_is_scoped_for_sellers(client, seller_headers, manager_headers, other_headers, create_lead):
    create_lead()
    create_lead()
    create_lead(headers=other_headers, userId=2)

    resp = client.get("/leads", headers=seller_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["pagination"]["total"] == 2
    assert all(1 in (lead["userId"], lead["sellerId"]) for lead in body["data"])

    body = client.get("/leads", headers=manager_headers).get_json()
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["totalPages"] == 1


def test_list_pagination_and_search(client, manager_headers, create_lead):
    for _ in range(3):
        create_lead()
    create_lead(customerId=701547)

    body = client.get("/leads?limit=2&page=2", headers=manager_headers).get_json()
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 4, "totalPages": 2}
    assert len(body["data"]) == 2

    body = client.get("/leads?q=Beta", headers=manager_headers).get_json()
    assert [lead["customerId"] for lead in body["data"]] == [701547]

    body = client.get("/leads?customerId=701546&sort=id&sortDir=asc", headers=manager_headers).get_json()
    ids = [lead["id"] for lead in body["data"]]
    assert ids == sorted(ids)
    assert len(ids) == 3


def test_list_rejects_bad_query(client, manager_headers):
    resp = client.get("/leads?limit=0", headers=manager_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["details"][0]["field"] == "limit"


def test_history_records_changes(client, seller_headers, create_lead):
    lead = create_lead()
    client.put(f"/leads/{lead['id']}", json={"freight": 10, "buyer": "João"}, headers=seller_headers)

    resp = client.get(f"/leads/{lead['id']}/history", headers=seller_headers)
    assert resp.status_code == 200
    entries = resp.get_json()["data"]
    assert [e["action"] for e in entries] == ["LEAD_UPDATE", "LEAD_CREATE"]
    changed = {c["field"] for c in entries[0]["changes"]}
    assert changed == {"freight", "buyer"}


def test_deleted_leads_never_listed(client, seller_headers, manager_headers, create_lead):
    kept = create_lead()
    gone = create_lead()
    assert client.delete(f"/leads/{gone['id']}", headers=seller_headers).status_code == 200

    resp = client.get("/leads?type=99", headers=seller_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["details"][0]["field"] == "type"

    body = client.get("/leads", headers=manager_headers).get_json()
    assert [lead["id"] for lead in body["data"]] == [kept["id"]]


def test_page_size_follows_settings(client, manager_headers, settings, create_lead):
    settings.default_page_size = 2
    settings.max_page_size = 3
    for _ in range(3):
        create_lead()

    body = client.get("/leads", headers=manager_headers).get_json()
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
    assert len(body["data"]) == 2

    assert client.get("/leads?limit=3", headers=manager_headers).status_code == 200
    resp = client.get("/leads?limit=4", headers=manager_headers)
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "limit"
