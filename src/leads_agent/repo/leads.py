"""Repositório de leads (sCart). Funções recebem a sessão da unidade de trabalho."""
from __future__ import annotations
from typing import Any
from sqlalchemy import select, update, func, case, and_
from sqlalchemy.orm import Session
from .models import Lead, Customer, LEAD_TYPE, ORDER_TYPE, DELETED_TYPE
from ..core.filters import LeadFilter, order_by, total_value_expr, item_count_expr
from ..core.logging import get_logger

log = get_logger()

def create(s: Session, values: dict[str, Any]) -> Lead:
    """Insere um lead novo (tipo 1, sem pedido web)."""
    lead = Lead(**values, type=LEAD_TYPE, order_web=None, updated=0)
    s.add(lead)
    s.flush()
    s.refresh(lead)
    log.info("lead_inserted", lead_id=lead.id, customer_id=lead.customer_id)
    return lead

def select_lead(lead_id: int, for_update: bool = False):
    """SELECT do lead ativo; for_update trava a linha até o fim da transação."""
    stmt = select(Lead).where(Lead.id == lead_id, Lead.type != DELETED_TYPE)
    return stmt.with_for_update() if for_update else stmt

def find_by_id(s: Session, lead_id: int, for_update: bool = False) -> Lead | None:
    """Busca lead com cliente; leads excluídos (tipo 99) não são encontrados."""
    return s.execute(select_lead(lead_id, for_update)).scalars().first()

def update_fields(s: Session, lead: Lead, fields: dict[str, Any]) -> Lead:
    """Grava apenas as colunas informadas e marca cUpdated=1."""
    for key, value in fields.items():
        setattr(lead, key, value)
    lead.updated = 1
    s.flush()
    s.refresh(lead)
    log.info("lead_updated", lead_id=lead.id, fields=sorted(fields))
    return lead

def soft_delete(s: Session, lead_id: int) -> int:
    res = s.execute(
        update(Lead)
        .where(Lead.id == lead_id, Lead.type == LEAD_TYPE)
        .values(type=DELETED_TYPE, updated=1)
        .execution_options(synchronize_session="fetch")
    )
    log.info("lead_soft_deleted", lead_id=lead_id)
    return res.rowcount

def claim_for_conversion(s: Session, lead_id: int) -> bool:
    """UPDATE condicional tipo 1 → 2. Só uma transação concorrente vence."""
    res = s.execute(
        update(Lead)
        .where(Lead.id == lead_id, Lead.type == LEAD_TYPE)
        .values(type=ORDER_TYPE, updated=1)
        .execution_options(synchronize_session=False)
    )
    return res.rowcount == 1

def list_leads(s: Session, flt: LeadFilter, page: int = 1, limit: int = 20,
               sort: str = "date", sort_dir: str = "desc") -> tuple[list[dict], dict]:
    """Lista paginada. Retorna (linhas, resumo) com total, valor total e convertidos."""
    total_value = total_value_expr()
    base = flt.apply(select(Lead.id).outerjoin(Customer, Customer.id == Lead.customer_id)).subquery()

    converted = case((and_(Lead.order_web.is_not(None), Lead.order_web != ""), 1), else_=0)
    total, value_sum, converted_count = s.execute(
        select(func.count(Lead.id), func.coalesce(func.sum(total_value), 0), func.coalesce(func.sum(converted), 0))
        .where(Lead.id.in_(select(base.c.id)))
    ).one()

    stmt = flt.apply(
        select(Lead, total_value.label("total_value"), item_count_expr().label("item_count"))
        .outerjoin(Customer, Customer.id == Lead.customer_id)
    )
    rows = s.execute(
        stmt.order_by(*order_by(sort, sort_dir)).limit(limit).offset((page - 1) * limit)
    ).unique().all()
    out = [{"lead": r[0], "total_value": r[1], "item_count": r[2]} for r in rows]
    summary = {"total": int(total or 0), "total_value": value_sum, "converted_count": int(converted_count or 0)}
    return out, summary
