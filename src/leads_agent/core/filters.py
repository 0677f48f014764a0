"""Filtro tipado para listagem de leads.

Cada campo opcional vira uma expressão SQLAlchemy com parâmetros vinculados;
campos ausentes não geram cláusula. A ordem de aplicação é fixa.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from sqlalchemy import Select, or_, and_, func, select, String, cast
from ..repo.models import Lead, CartItem, Customer, LEAD_TYPE, DELETED_TYPE

NO_SEGMENT = ("null", "sem-segmento")

SORT_KEYS = ("date", "id", "total", "customer", "orderWeb", "segment")

def total_value_expr():
    """Subquery correlacionada: Σ quantidade × preço dos itens do lead."""
    return (
        select(func.coalesce(func.sum(CartItem.quantity * CartItem.price), 0))
        .where(CartItem.lead_id == Lead.id)
        .correlate(Lead)
        .scalar_subquery()
    )

def item_count_expr():
    return (
        select(func.count(CartItem.id))
        .where(CartItem.lead_id == Lead.id)
        .correlate(Lead)
        .scalar_subquery()
    )

@dataclass(frozen=True)
class LeadFilter:
    customer_id: int | None = None
    owner_id: int | None = None      # criador OU vendedor
    user_id: int | None = None
    seller_id: int | None = None
    type: int | None = LEAD_TYPE
    segment: str | None = None
    status: str | None = None        # aberto | convertido
    date_from: date | None = None
    date_to: date | None = None
    search: str | None = None

    def scoped_to(self, user_id: int) -> "LeadFilter":
        """Restringe a leads onde user_id é criador ou vendedor."""
        return replace(self, owner_id=user_id, user_id=None, seller_id=None)

    def clauses(self) -> list:
        out = [Lead.type != DELETED_TYPE]
        if self.customer_id is not None:
            out.append(Lead.customer_id == self.customer_id)
        if self.owner_id is not None:
            out.append(or_(Lead.user_id == self.owner_id, Lead.seller_id == self.owner_id))
        if self.user_id is not None:
            out.append(Lead.user_id == self.user_id)
        if self.seller_id is not None:
            out.append(Lead.seller_id == self.seller_id)
        if self.type is not None:
            out.append(Lead.type == self.type)
        if self.segment:
            if self.segment in NO_SEGMENT:
                out.append(or_(Lead.segment.is_(None), Lead.segment == 0))
            else:
                out.append(or_(Lead.segment == int(self.segment), Lead.segment.is_(None), Lead.segment == 0))
        if self.status == "aberto":
            out.append(or_(Lead.order_web.is_(None), Lead.order_web == ""))
        elif self.status == "convertido":
            out.append(and_(Lead.order_web.is_not(None), Lead.order_web != ""))
        if self.date_from is not None:
            out.append(Lead.created_at >= datetime.combine(self.date_from, time.min))
        if self.date_to is not None:
            out.append(Lead.created_at < datetime.combine(self.date_to + timedelta(days=1), time.min))
        if self.search:
            term = self.search.strip()
            if term.isdigit():
                n = int(term)
                out.append(or_(Lead.id == n, Lead.customer_id == n, Lead.order_web == term))
            else:
                like = f"%{term}%"
                out.append(or_(Customer.name.like(like), Lead.order_web.like(like), Lead.buyer.like(like)))
        return out

    def apply(self, stmt: Select) -> Select:
        """Aplica as cláusulas a um select que já faz outer join com clientes."""
        for clause in self.clauses():
            stmt = stmt.where(clause)
        return stmt

def order_by(sort: str = "date", direction: str = "desc") -> list:
    """Traduz chave de ordenação em expressões ORDER BY; desempate por id desc."""
    desc = direction.lower() != "asc"
    column = {
        "date": Lead.created_at,
        "id": Lead.id,
        "total": total_value_expr(),
        "customer": Customer.name,
        "orderWeb": cast(Lead.order_web, String),
        "segment": Lead.segment,
    }.get(sort, Lead.created_at)
    first = column.desc() if desc else column.asc()
    if sort == "id":
        return [first]
    return [first, Lead.id.desc()]
