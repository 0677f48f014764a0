"""Rotas de metadados (listas de referência cacheadas)."""
from __future__ import annotations
from flask import Blueprint, request
from ..auth import authenticate, require_manager
from ..responses import ok
from ...core import errors
from ...domain import metadata

bp = Blueprint("metadata", __name__, url_prefix="/leads")
bp.before_request(authenticate)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")
admin_bp.before_request(authenticate)

@bp.get("/segments")
def segments():
    return ok(metadata.lookup("segments"))

@bp.get("/metadata/nops")
def nops():
    return ok(metadata.lookup("nops"))

@bp.get("/metadata/transporters")
def transporters():
    return ok(metadata.lookup("transporters"))

@bp.get("/metadata/payment-types")
def payment_types():
    return ok(metadata.lookup("payment_types"))

@bp.get("/metadata/payment-terms")
def payment_terms():
    return ok(metadata.lookup("payment_terms"))

@bp.get("/metadata/units")
def units():
    return ok(metadata.lookup("units"))

@bp.get("/metadata/customer-transporter")
def customer_transporter():
    """Transportadora mais usada pelo cliente (não cacheada)."""
    raw = (request.args.get("customerId") or "").strip()
    if not raw.isdigit() or int(raw) <= 0:
        raise errors.missing_field("customerId")
    found = metadata.customer_transporter(int(raw))
    if found is None:
        return ok(None, message="Nenhuma transportadora encontrada para este cliente")
    return ok(found)

@admin_bp.post("/metadata/refresh")
def refresh_metadata():
    require_manager()
    keys = metadata.refresh_all()
    return ok({"refreshed": keys}, message="Cache de metadados recarregado")
