"""Consultas de referência (somente leitura)."""
from __future__ import annotations
from decimal import Decimal
from sqlalchemy import select, func, union_all, literal_column
from sqlalchemy.orm import Session
from .models import Nop, Transporter, PaymentType, PaymentTerm, EmitUnit, Segment, User, Lead, Order

def nops(s: Session) -> list[dict]:
    rows = s.execute(select(Nop.id, Nop.name, Nop.kind).order_by(Nop.name)).all()
    return [{"id": r.id, "name": r.name, "tipo": r.kind} for r in rows]

def transporters(s: Session) -> list[dict]:
    rows = s.execute(
        select(Transporter.id, Transporter.name).where(Transporter.active == 1).order_by(Transporter.name)
    ).all()
    return [{"id": r.id, "name": r.name} for r in rows]

def payment_types(s: Session) -> list[dict]:
    rows = s.execute(select(PaymentType.id, PaymentType.name).order_by(PaymentType.name)).all()
    return [{"id": r.id, "name": r.name} for r in rows]

def payment_terms(s: Session) -> list[dict]:
    rows = s.execute(
        select(PaymentTerm.id, PaymentTerm.terms, PaymentTerm.nat_op)
        .where(PaymentTerm.active == 1).order_by(PaymentTerm.id)
    ).all()
    return [{"id": r.id, "terms": r.terms, "natOp": r.nat_op} for r in rows]

def units(s: Session) -> list[dict]:
    rows = s.execute(select(EmitUnit.id, EmitUnit.name, EmitUnit.uf).order_by(EmitUnit.name)).all()
    return [{"id": r.id, "name": r.name, "UF": r.uf} for r in rows]

def segments(s: Session) -> list[dict]:
    rows = s.execute(select(Segment.id, Segment.name).order_by(Segment.name)).all()
    return [{"id": r.id, "name": r.name} for r in rows]

def payment_overcharge(s: Session, payment_type_id: int | None) -> Decimal | None:
    """Acréscimo (%) da forma de pagamento; None se desconhecido."""
    if not payment_type_id:
        return None
    return s.execute(
        select(PaymentType.overcharge).where(PaymentType.id == payment_type_id)
    ).scalar()

def term_string(s: Session, term_id: int) -> str | None:
    return s.execute(select(PaymentTerm.terms).where(PaymentTerm.id == term_id).limit(1)).scalar()

def seller_segment_slug(s: Session, seller_id: int) -> str | None:
    return s.execute(select(User.segment_slug).where(User.id == seller_id)).scalar()

def customer_transporter(s: Session, customer_id: int) -> dict | None:
    """Transportadora mais usada pelo cliente em leads e pedidos.

    Empate é decidido pelo uso mais recente. Transportadora inativa conta como ausente.
    """
    combined = union_all(
        select(Lead.transporter_id.label("tid"), Lead.created_at.label("used_at"))
        .where(Lead.customer_id == customer_id, Lead.transporter_id.is_not(None), Lead.transporter_id > 0),
        select(Order.transporter_id.label("tid"), Order.created_at.label("used_at"))
        .where(Order.customer_id == customer_id, Order.transporter_id.is_not(None), Order.transporter_id > 0),
    ).subquery("combined")
    usage = func.count(literal_column("*"))
    last_used = func.max(combined.c.used_at)
    top = s.execute(
        select(combined.c.tid, usage.label("usage_count"), last_used.label("last_used"))
        .group_by(combined.c.tid)
        .order_by(usage.desc(), last_used.desc())
        .limit(1)
    ).first()
    if top is None:
        return None
    transporter = s.execute(
        select(Transporter).where(Transporter.id == top.tid, Transporter.active == 1)
    ).scalars().first()
    if transporter is None:
        return None
    return {
        "id": transporter.id,
        "name": transporter.name,
        "usageCount": int(top.usage_count),
        "lastUsed": top.last_used,
    }
