"""Rotas de leads, itens, totais, conversão e histórico."""
from __future__ import annotations
from flask import Blueprint, request
from ..auth import authenticate, current_user, client_ip, parse_id, json_body
from ..responses import ok
from ...domain import leads as lead_service, items as item_service, conversion

bp = Blueprint("leads", __name__, url_prefix="/leads")
bp.before_request(authenticate)

@bp.get("")
def list_leads():
    """Lista paginada com filtros (customerId, q, cSegment, status, dateFrom/dateTo, sort)."""
    data, pagination, summary = lead_service.list_leads(request.args.to_dict(), current_user())
    return ok(data, pagination=pagination, summary=summary)

@bp.post("")
def create_lead():
    data, warnings = lead_service.create_lead(json_body(), current_user(), client_ip())
    return ok(data, 201, message="Lead criado com sucesso", warnings=warnings)

@bp.get("/<lead_id>")
def get_lead(lead_id: str):
    return ok(lead_service.get_lead(parse_id(lead_id, "lead"), current_user()))

@bp.put("/<lead_id>")
def update_lead(lead_id: str):
    data, warnings = lead_service.update_lead(parse_id(lead_id, "lead"), json_body(), current_user(), client_ip())
    return ok(data, message="Lead atualizado com sucesso", warnings=warnings)

@bp.delete("/<lead_id>")
def delete_lead(lead_id: str):
    warnings = lead_service.delete_lead(parse_id(lead_id, "lead"), current_user(), client_ip())
    return ok(None, message="Lead excluído com sucesso", warnings=warnings)

@bp.get("/<lead_id>/items")
def list_items(lead_id: str):
    return ok(item_service.list_items(parse_id(lead_id, "lead"), current_user()))

@bp.post("/<lead_id>/items")
def add_item(lead_id: str):
    data, warnings = item_service.add_item(parse_id(lead_id, "lead"), json_body(), current_user(), client_ip())
    return ok(data, 201, message="Item adicionado", warnings=warnings)

@bp.put("/<lead_id>/items/<item_id>")
def update_item(lead_id: str, item_id: str):
    data, warnings = item_service.update_item(
        parse_id(lead_id, "lead"), parse_id(item_id, "item"), json_body(), current_user(), client_ip()
    )
    return ok(data, message="Item atualizado", warnings=warnings)

@bp.delete("/<lead_id>/items/<item_id>")
def remove_item(lead_id: str, item_id: str):
    warnings = item_service.remove_item(parse_id(lead_id, "lead"), parse_id(item_id, "item"), current_user(), client_ip())
    return ok(None, message="Item removido", warnings=warnings)

@bp.get("/<lead_id>/totals")
def totals(lead_id: str):
    return ok(item_service.lead_totals(parse_id(lead_id, "lead"), current_user()))

@bp.post("/<lead_id>/convert")
def convert(lead_id: str):
    """Converte o lead em pedido. Corpo opcional: {remarks, cTransporter}."""
    data, warnings = conversion.convert_to_order(parse_id(lead_id, "lead"), json_body(), current_user(), client_ip())
    return ok(data, message="Lead convertido em pedido", warnings=warnings)

@bp.get("/<lead_id>/history")
def history(lead_id: str):
    return ok(lead_service.lead_history(parse_id(lead_id, "lead"), current_user()))
