from leads_agent.repo.models import Transporter


def test_reference_lists(client, seller_headers):
    nops = client.get("/leads/metadata/nops", headers=seller_headers).get_json()["data"]
    assert [n["name"] for n in nops] == ["Bonificação", "Venda de mercadoria"]
    assert nops[1] == {"id": 27, "name": "Venda de mercadoria", "tipo": "saida"}

    transporters = client.get("/leads/metadata/transporters", headers=seller_headers).get_json()["data"]
    assert [t["id"] for t in transporters] == [15, 9]

    terms = client.get("/leads/metadata/payment-terms", headers=seller_headers).get_json()["data"]
    assert [t["terms"] for t in terms] == ["n:30:30", "n:28:56"]

    types = client.get("/leads/metadata/payment-types", headers=seller_headers).get_json()["data"]
    assert {t["name"] for t in types} == {"Boleto", "Cartão"}

    units = client.get("/leads/metadata/units", headers=seller_headers).get_json()["data"]
    assert units[0] == {"id": 2, "name": "Filial SC", "UF": "SC"}

    segments = client.get("/leads/segments", headers=seller_headers).get_json()["data"]
    assert {s["id"] for s in segments} == {1, 2}


def test_lists_are_cached_until_refresh(client, seller_headers, manager_headers, session_factory):
    before = client.get("/leads/metadata/transporters", headers=seller_headers).get_json()["data"]
    with session_factory() as s, s.begin():
        s.add(Transporter(id=30, name="Jadlog", active=1))

    cached = client.get("/leads/metadata/transporters", headers=seller_headers).get_json()["data"]
    assert cached == before

    assert client.post("/admin/metadata/refresh", headers=seller_headers).status_code == 403
    resp = client.post("/admin/metadata/refresh", headers=manager_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["refreshed"] == [
        "nops", "payment_terms", "payment_types", "segments", "transporters", "units",
    ]

    fresh = client.get("/leads/metadata/transporters", headers=seller_headers).get_json()["data"]
    assert 30 in [t["id"] for t in fresh]


def test_customer_transporter_requires_customer(client, seller_headers):
    resp = client.get("/leads/metadata/customer-transporter", headers=seller_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "MISSING_REQUIRED_FIELD"


def test_customer_transporter_most_used(client, seller_headers, create_lead):
    create_lead(customerId=701547, cTransporter=15)
    create_lead(customerId=701547, cTransporter=15)
    create_lead(customerId=701547)

    resp = client.get("/leads/metadata/customer-transporter?customerId=701547", headers=seller_headers)
    data = resp.get_json()["data"]
    assert data["id"] == 15
    assert data["name"] == "Braspress"
    assert data["usageCount"] == 2


def test_customer_transporter_tie_prefers_most_recent(client, seller_headers, create_lead):
    create_lead(customerId=701547, cTransporter=15)
    create_lead(customerId=701547, cTransporter=9)
    data = client.get("/leads/metadata/customer-transporter?customerId=701547",
                      headers=seller_headers).get_json()["data"]
    assert data["id"] == 9


def test_customer_transporter_none_or_inactive(client, seller_headers, create_lead):
    resp = client.get("/leads/metadata/customer-transporter?customerId=701547", headers=seller_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"] is None

    create_lead(customerId=701547, cTransporter=20)
    resp = client.get("/leads/metadata/customer-transporter?customerId=701547", headers=seller_headers)
    assert resp.get_json()["data"] is None
