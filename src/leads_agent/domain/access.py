"""Regras de acesso: gerente (level > manager_level) enxerga tudo; vendedor só o que é seu."""
from __future__ import annotations
from kink import di
from ..core.settings import Settings
from ..core import errors
from ..repo.models import Lead, Order

def is_manager(user: dict) -> bool:
    return int(user.get("level") or 0) > di[Settings].manager_level

def can_access_lead(user: dict, lead: Lead) -> bool:
    if is_manager(user):
        return True
    uid = user.get("userId")
    return uid is not None and uid in (lead.user_id, lead.seller_id)

def ensure_lead_access(user: dict, lead: Lead) -> None:
    if not can_access_lead(user, lead):
        raise errors.forbidden("Sem permissão para acessar este lead")

def ensure_order_access(user: dict, order: Order) -> None:
    if is_manager(user):
        return
    uid = user.get("userId")
    if uid is None or uid not in (order.seller_id, order.emitter_id):
        raise errors.forbidden("Sem permissão para acessar este pedido")
