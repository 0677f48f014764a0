"""Repositório de pedidos (hoje = cabeçalho, hist = linhas)."""
from __future__ import annotations
from datetime import date
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.orm import Session
from .models import Order, OrderItem, Lead, CartItem

ORDER_DEADLINE = 204
UNMAPPED_LOG_UNITY = 99

def find_by_id(s: Session, order_id: int) -> Order | None:
    """Pedido com cliente, transportadora e linhas."""
    return s.execute(select(Order).where(Order.id == order_id)).unique().scalars().first()

def joined_remarks(lead: Lead) -> str:
    parts = [lead.remarks_finance, lead.remarks_logistic, lead.remarks_nfe, lead.remarks_obs, lead.remarks_manager]
    return " | ".join(p.strip() for p in parts if p and p.strip())

def create_from_lead(s: Session, lead: Lead, items: list[CartItem], user_id: int, totals) -> Order:
    """Insere cabeçalho e linhas do pedido na transação corrente.

    Unidade logística 99 é gravada como 1 (emissor e unidade logística).
    """
    unilog = 1 if lead.log_unity == UNMAPPED_LOG_UNITY else lead.log_unity
    order = Order(
        nop=lead.nat_op,
        customer_id=lead.customer_id,
        reseller_id=lead.reseller_id or 0,
        emitter_id=user_id,
        seller_id=lead.seller_id or user_id,
        payment_type=lead.payment_type,
        terms=lead.payment_terms_id or 0,
        payment_terms=lead.payment_terms,
        deadline=ORDER_DEADLINE,
        transporter_id=lead.transporter_id or 9,
        freight=totals.freight,
        emit_unity=unilog,
        log_unity=unilog,
        delivery_date=lead.delivery_date or date.today(),
        crossover=0,
        obs=joined_remarks(lead),
        obs_finance=lead.remarks_finance or "",
        obs_logistic=lead.remarks_logistic or "",
        obs_nfe=lead.remarks_nfe or "",
        base_value=totals.subtotal,
        st_value=totals.total_st,
        ipi_value=totals.total_ipi,
        total=totals.grand_total,
        usvale=totals.grand_total,
        reseller_commission=lead.commission or Decimal("0"),
        entrada=Decimal("0"),
        spedido=0,
        source=lead.source or 0,
    )
    s.add(order)
    s.flush()
    for item in items:
        s.add(OrderItem(
            order_id=order.id,
            customer_id=lead.customer_id,
            product_id=item.product_id,
            quantity=item.quantity,
            times=item.times or 1,
            value=item.price * item.quantity,
            base_value=item.price,
            price=item.price,
            consumer_price=item.consumer_price or item.price,
            ipi_rate=Decimal("0"),
            ipi_value=item.ipi or Decimal("0"),
            st_value=item.st or Decimal("0"),
            entrada=Decimal("0"),
            list_price=item.original_price or item.price,
            stock=0,
            obs="",
            ttd=item.ttd or 0,
        ))
    s.flush()
    return order
