"""Auditoria de leads: gravação tolerante a falhas e timeline."""
from __future__ import annotations
from typing import Any
from sqlalchemy.exc import SQLAlchemyError
from ..repo import audit
from ..core.logging import get_logger
from .serializers import iso

log = get_logger()

ACTION_LABELS = {
    audit.LEAD_CREATE: "Lead criado",
    audit.LEAD_UPDATE: "Lead atualizado",
    audit.LEAD_DELETE: "Lead excluído",
    audit.LEAD_CONVERT: "Convertido em pedido",
    audit.ITEM_ADD: "Item adicionado",
    audit.ITEM_UPDATE: "Item atualizado",
    audit.ITEM_DELETE: "Item removido",
}

TRACKED_FIELDS = (
    ("customerId", "Cliente"),
    ("freight", "Frete"),
    ("paymentType", "Tipo de Pagamento"),
    ("paymentTerms", "Condições de Pagamento"),
    ("deliveryDate", "Data de Entrega"),
    ("remarks", "Observações"),
    ("buyer", "Comprador"),
    ("purchaseOrder", "Pedido de Compra"),
)

def record(action: str, user: dict, lead_id: int, old: dict | None = None, new: dict | None = None,
           metadata: dict | None = None, ip: str | None = None) -> list[str]:
    """Grava o evento; falha vira aviso (log + retorno), nunca desfaz a operação principal."""
    try:
        audit.log_event(action, user, "lead", lead_id, old=old, new=new, metadata=metadata, ip=ip)
    except SQLAlchemyError as exc:
        log.warning("audit_failed", action=action, lead_id=lead_id, error=str(exc))
        return [f"Falha ao registrar auditoria ({action})"]
    return []

def diff(old: dict, new: dict) -> list[dict]:
    changes = []
    for key, label in TRACKED_FIELDS:
        if old.get(key) != new.get(key):
            changes.append({"field": key, "label": label, "oldValue": old.get(key), "newValue": new.get(key)})
    return changes

def timeline(lead_id: int, limit: int = 100) -> list[dict[str, Any]]:
    """Eventos do lead, mais recentes primeiro."""
    out = []
    for entry in audit.find_for_resource("lead", lead_id, limit=limit):
        changes = []
        if entry.action == audit.LEAD_UPDATE and entry.old_value and entry.new_value:
            changes = diff(entry.old_value, entry.new_value)
        out.append({
            "id": entry.id,
            "action": entry.action,
            "label": ACTION_LABELS.get(entry.action, entry.action),
            "userId": entry.user_id,
            "userName": entry.user_name,
            "createdAt": iso(entry.created_at),
            "ipAddress": entry.ip_address,
            "changes": changes,
            "metadata": entry.extra,
            "hasDetails": bool(changes) or entry.extra is not None,
        })
    return out
