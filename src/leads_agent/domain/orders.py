"""Consulta de pedidos convertidos."""
from __future__ import annotations
from kink import di
from sqlalchemy import select
from ..core import errors
from ..repo import orders as order_repo
from ..repo.models import Lead
from .access import ensure_order_access
from .serializers import order_to_dict

def get_order(order_id: int, user: dict) -> dict:
    """Pedido com itens; acesso restrito a vendedor/emissor ou gerente."""
    Session = di["session_factory"]
    with Session() as s:
        order = order_repo.find_by_id(s, order_id)
        if order is None:
            raise errors.order_not_found(order_id)
        ensure_order_access(user, order)
        lead_id = s.execute(select(Lead.id).where(Lead.order_web == str(order_id))).scalar()
        data = order_to_dict(order)
    data["leadId"] = lead_id
    return data
