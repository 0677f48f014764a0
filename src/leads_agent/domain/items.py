"""Serviço de itens do carrinho e totais do lead."""
from __future__ import annotations
from kink import di
from ..core import errors
from ..core.logging import get_logger
from ..ports.interfaces import ItemCreateDTO, ItemUpdateDTO
from ..repo import cart_items as item_repo, metadata as meta_repo, audit
from .leads import load_open_lead, load_lead
from .serializers import item_to_dict
from .totals import compute_totals
from . import history

log = get_logger()

UPDATABLE = ("product_id", "quantity", "price", "consumer_price", "times", "ipi", "st", "ttd")

def list_items(lead_id: int, user: dict) -> list[dict]:
    Session = di["session_factory"]
    with Session() as s:
        load_lead(s, lead_id, user)
        return [item_to_dict(i) for i in item_repo.list_for_lead(s, lead_id)]

def add_item(lead_id: int, body: dict, user: dict, ip: str | None = None) -> tuple[dict, list[str]]:
    """Adiciona item; preço de tabela (originalPrice) vem sempre do cadastro do produto."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        load_open_lead(s, lead_id, user)
        dto = ItemCreateDTO.model_validate(body)
        product = item_repo.get_product(s, dto.product_id)
        if product is None:
            raise errors.product_not_found(dto.product_id)
        item = item_repo.add(s, lead_id, {
            "product_id": dto.product_id,
            "quantity": dto.quantity,
            "price": dto.price,
            "consumer_price": dto.consumer_price if dto.consumer_price is not None else dto.price,
            "original_price": product.list_price or 0,
            "times": dto.times,
            "ipi": dto.ipi,
            "st": dto.st,
            "ttd": dto.ttd,
        })
        data = item_to_dict(item)
    warnings = history.record(audit.ITEM_ADD, user, lead_id, new=data,
                              metadata={"itemId": data["id"], "productId": data["productId"]}, ip=ip)
    return data, warnings

def update_item(lead_id: int, item_id: int, body: dict, user: dict, ip: str | None = None) -> tuple[dict, list[str]]:
    Session = di["session_factory"]
    with Session() as s, s.begin():
        load_open_lead(s, lead_id, user)
        item = item_repo.get_for_lead(s, lead_id, item_id)
        if item is None:
            raise errors.item_not_found(item_id)
        dto = ItemUpdateDTO.model_validate(body)
        sent = dto.model_dump(exclude_unset=True)
        fields = {k: sent[k] for k in UPDATABLE if k in sent and sent[k] is not None}
        if "product_id" in fields and fields["product_id"] != item.product_id:
            product = item_repo.get_product(s, fields["product_id"])
            if product is None:
                raise errors.product_not_found(fields["product_id"])
            fields["original_price"] = product.list_price or 0
        before = item_to_dict(item)
        item = item_repo.update_fields(s, item, fields)
        data = item_to_dict(item)
    warnings = history.record(audit.ITEM_UPDATE, user, lead_id, old=before, new=data,
                              metadata={"itemId": item_id}, ip=ip)
    return data, warnings

def remove_item(lead_id: int, item_id: int, user: dict, ip: str | None = None) -> list[str]:
    Session = di["session_factory"]
    with Session() as s, s.begin():
        load_open_lead(s, lead_id, user)
        item = item_repo.get_for_lead(s, lead_id, item_id)
        if item is None:
            raise errors.item_not_found(item_id)
        before = item_to_dict(item)
        item_repo.remove(s, item)
    return history.record(audit.ITEM_DELETE, user, lead_id, old=before, metadata={"itemId": item_id}, ip=ip)

def lead_totals(lead_id: int, user: dict) -> dict:
    """Totais recalculados a cada chamada a partir dos itens atuais."""
    Session = di["session_factory"]
    with Session() as s:
        lead = load_lead(s, lead_id, user)
        items = item_repo.list_for_lead(s, lead_id)
        overcharge = meta_repo.payment_overcharge(s, lead.payment_type) if lead.reseller_id else None
        totals = compute_totals(items, lead.freight, reseller_id=lead.reseller_id, overcharge=overcharge)
    return totals.to_dict()
