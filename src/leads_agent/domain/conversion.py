"""Conversão lead → pedido.

Tudo acontece numa única transação que começa reivindicando o lead com
UPDATE ... WHERE cType = 1. Só a transação que afeta a linha segue; as demais
recebem LEAD_NOT_FOUND ou LEAD_ALREADY_CONVERTED. Qualquer erro posterior
(acesso, carrinho vazio, banco) desfaz também a reivindicação.
"""
from __future__ import annotations
from kink import di
from sqlalchemy import select
from ..core import errors
from ..core.logging import get_logger
from ..ports.interfaces import ConvertDTO
from ..repo import leads as lead_repo, cart_items as item_repo, orders as order_repo, metadata as meta_repo, audit
from ..repo.models import Lead, DELETED_TYPE
from .access import can_access_lead, ensure_lead_access
from .leads import REMARK_COLUMNS
from .totals import compute_totals
from . import history

log = get_logger()

def _claim_failure(s, lead_id: int, user: dict) -> errors.AppError:
    """Erro para a reivindicação que não afetou linha; quem não tem acesso recebe 403."""
    row = s.execute(
        select(Lead.type, Lead.user_id, Lead.seller_id).where(Lead.id == lead_id)
    ).first()
    if row is None or row.type == DELETED_TYPE:
        return errors.lead_not_found(lead_id)
    if not can_access_lead(user, row):
        return errors.forbidden("Sem permissão para acessar este lead")
    return errors.lead_already_converted(lead_id)

def convert_to_order(lead_id: int, body: dict | None, user: dict, ip: str | None = None) -> tuple[dict, list[str]]:
    """Converte o lead e retorna ({orderId, leadId, orderWeb}, avisos)."""
    overrides = ConvertDTO.model_validate(body or {})
    Session = di["session_factory"]
    with Session() as s, s.begin():
        if not lead_repo.claim_for_conversion(s, lead_id):
            raise _claim_failure(s, lead_id, user)

        lead = s.get(Lead, lead_id, populate_existing=True)
        ensure_lead_access(user, lead)

        if overrides.remarks is not None:
            for key, value in overrides.remarks.model_dump(exclude_unset=True).items():
                setattr(lead, REMARK_COLUMNS[key], value or "")
        if overrides.transporter_id is not None:
            lead.transporter_id = overrides.transporter_id

        items = item_repo.list_for_lead(s, lead_id)
        if not items:
            raise errors.empty_cart()

        overcharge = meta_repo.payment_overcharge(s, lead.payment_type) if lead.reseller_id else None
        totals = compute_totals(items, lead.freight, reseller_id=lead.reseller_id, overcharge=overcharge)
        order = order_repo.create_from_lead(s, lead, items, user.get("userId"), totals)
        lead.order_web = str(order.id)
        s.flush()
        result = {"orderId": order.id, "leadId": lead_id, "orderWeb": lead.order_web}

    log.info("lead_converted", lead_id=lead_id, order_id=result["orderId"], items=len(items),
             grand_total=str(totals.grand_total))
    warnings = history.record(
        audit.LEAD_CONVERT, user, lead_id,
        new={"orderId": result["orderId"], "orderWeb": result["orderWeb"]},
        metadata={"itemCount": totals.item_count, "grandTotal": float(totals.grand_total)},
        ip=ip,
    )
    return result, warnings
