"""Repositório de itens do carrinho (icart)."""
from __future__ import annotations
from typing import Any
from sqlalchemy import select
from sqlalchemy.orm import Session
from .models import CartItem, Product
from ..core.logging import get_logger

log = get_logger()

def list_for_lead(s: Session, lead_id: int) -> list[CartItem]:
    """Itens do lead em ordem de inclusão, com produto."""
    return list(s.execute(
        select(CartItem).where(CartItem.lead_id == lead_id).order_by(CartItem.id)
    ).scalars().all())

def get_for_lead(s: Session, lead_id: int, item_id: int) -> CartItem | None:
    """Item só é encontrado pelo caminho do lead ao qual pertence."""
    return s.execute(
        select(CartItem).where(CartItem.id == item_id, CartItem.lead_id == lead_id)
    ).scalars().first()

def get_product(s: Session, product_id: int) -> Product | None:
    return s.get(Product, product_id)

def add(s: Session, lead_id: int, values: dict[str, Any]) -> CartItem:
    item = CartItem(lead_id=lead_id, **values)
    s.add(item)
    s.flush()
    s.refresh(item)
    log.info("item_inserted", lead_id=lead_id, item_id=item.id, product_id=item.product_id)
    return item

def update_fields(s: Session, item: CartItem, fields: dict[str, Any]) -> CartItem:
    """Atribui apenas os campos informados."""
    for key, value in fields.items():
        setattr(item, key, value)
    s.flush()
    s.refresh(item)
    log.info("item_updated", lead_id=item.lead_id, item_id=item.id, fields=sorted(fields))
    return item

def remove(s: Session, item: CartItem) -> None:
    s.delete(item)
    s.flush()
    log.info("item_removed", lead_id=item.lead_id, item_id=item.id)
