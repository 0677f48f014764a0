"""
Fixtures: app Flask sobre SQLite em arquivo temporário, dados de referência e tokens.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt
import pytest
from kink import di

from leads_agent.api.app import create_app
from leads_agent.core.settings import Settings
from leads_agent.repo.models import (
    Base, Customer, Product, User, Segment, Transporter, Nop, PaymentType, PaymentTerm, EmitUnit,
)

SECRET = "test-secret-with-at-least-32-bytes!!"

SELLER = {"userId": 1, "level": 1, "username": "vendedor1"}
OTHER_SELLER = {"userId": 2, "level": 1, "username": "vendedor2"}
MANAGER = {"userId": 9, "level": 5, "username": "gerente"}


def make_token(claims: dict, expires_in: int = 3600) -> str:
    payload = dict(claims, exp=datetime.now(timezone.utc) + timedelta(seconds=expires_in))
    return jwt.encode(payload, SECRET, algorithm="HS256")


def bearer(claims: dict) -> dict:
    return {"Authorization": f"Bearer {make_token(claims)}"}


def seed(session_factory):
    with session_factory() as s, s.begin():
        s.add_all([
            Customer(id=701546, name="Cliente Teste Ltda", address="Rua A, 100", city="São Paulo", state="SP"),
            Customer(id=701547, name="Comercial Beta", city="Campinas", state="SP"),
            Product(id=123456, model="BX2", brand="Marca X", name="Máquina BX2", list_price=Decimal("199.90")),
            Product(id=123457, model="R10", brand="Marca Y", name="Rolamento R10", list_price=Decimal("12.50")),
            User(id=1, user="vendedor1", nick="Vend 1", segment_slug="machines"),
            User(id=2, user="vendedor2", nick="Vend 2", segment_slug="bearings"),
            User(id=9, user="gerente", nick="Gerente", segment_slug=None),
            Segment(id=1, name="Máquinas"),
            Segment(id=2, name="Rolamentos"),
            Transporter(id=9, name="Retira", active=1),
            Transporter(id=15, name="Braspress", active=1),
            Transporter(id=20, name="Antiga Transportes", active=0),
            Nop(id=27, name="Venda de mercadoria", kind="saida"),
            Nop(id=30, name="Bonificação", kind="saida"),
            PaymentType(id=2, name="Boleto", overcharge=Decimal("0")),
            PaymentType(id=5, name="Cartão", overcharge=Decimal("3.50")),
            PaymentTerm(id=1, terms="n:30:30", nat_op=27, active=1),
            PaymentTerm(id=2, terms="n:28:56", nat_op=27, active=1),
            PaymentTerm(id=3, terms="n:90", nat_op=27, active=0),
            EmitUnit(id=1, name="Matriz", uf="SP"),
            EmitUnit(id=2, name="Filial SC", uf="SC"),
        ])


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'leads.db'}",
        jwt_secret=SECRET,
        environment="development",
        metadata_cache_ttl_s=60,
        pricing_api_url="https://pricing.test/pricing/run",
        pricing_api_key="pricing-key",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config.update(TESTING=True)
    session_factory = di["session_factory"]
    Base.metadata.create_all(session_factory.kw["bind"])
    seed(session_factory)
    yield app
    session_factory.kw["bind"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session_factory(app):
    return di["session_factory"]


@pytest.fixture
def seller_headers():
    return bearer(SELLER)


@pytest.fixture
def other_headers():
    return bearer(OTHER_SELLER)


@pytest.fixture
def manager_headers():
    return bearer(MANAGER)


@pytest.fixture
def create_lead(client, seller_headers):
    """Cria um lead via API e retorna o JSON de dados."""
    def _create(headers=None, **body):
        payload = {"customerId": 701546, "userId": 1, **body}
        resp = client.post("/leads", json=payload, headers=headers or seller_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["data"]
    return _create


@pytest.fixture
def add_item(client, seller_headers):
    def _add(lead_id, headers=None, **body):
        payload = {"productId": 123456, "quantity": 10, "price": 150.00, **body}
        resp = client.post(f"/leads/{lead_id}/items", json=payload, headers=headers or seller_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["data"]
    return _add
