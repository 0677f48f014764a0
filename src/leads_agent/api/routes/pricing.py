"""Proxy autenticado para o serviço de pricing."""
from __future__ import annotations
from flask import Blueprint
from kink import di
from ..auth import authenticate, json_body
from ..responses import ok
from ...connectors.pricing.client import PricingClient
from ...ports.interfaces import PricingRunDTO, PricingPort

bp = Blueprint("pricing", __name__, url_prefix="/pricing")
bp.before_request(authenticate)

@bp.post("/run")
def run():
    payload = PricingRunDTO.model_validate(json_body())
    client: PricingPort = di[PricingClient]
    return ok(client.run(payload.model_dump(mode="json", exclude_none=True)))
