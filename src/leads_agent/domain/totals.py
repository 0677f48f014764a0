"""Cálculo de totais do carrinho: função pura, Decimal, arredondamento half-up em 2 casas.

Cada agregado é arredondado uma única vez; total e grandTotal somam componentes
já arredondados, então grandTotal == subtotal + totalIPI + totalST + freight exatamente.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

CENT = Decimal("0.01")
ZERO = Decimal("0")
FEDERAL_TAX_RATE = Decimal("0.082")
ICMS_RATE = Decimal("0.088")

class PricedItem(Protocol):
    quantity: Decimal
    price: Decimal
    consumer_price: Decimal | None
    ipi: Decimal | None
    st: Decimal | None

def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))

def money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

@dataclass(frozen=True)
class Profitability:
    margin: Decimal
    desc_fp: Decimal
    desc_fed: Decimal
    desc_icms: Decimal
    commission: Decimal
    margin_percent: Decimal

    def to_dict(self) -> dict:
        return {
            "margin": float(self.margin),
            "descFP": float(self.desc_fp),
            "descFed": float(self.desc_fed),
            "descIcms": float(self.desc_icms),
            "commission": float(self.commission),
            "marginPercent": float(self.margin_percent),
        }

@dataclass(frozen=True)
class CartTotals:
    item_count: int
    total_quantity: Decimal
    subtotal: Decimal
    consumer_subtotal: Decimal
    total_ipi: Decimal
    total_st: Decimal
    total: Decimal
    consumer_total: Decimal
    freight: Decimal
    grand_total: Decimal
    consumer_grand_total: Decimal
    profitability: Profitability | None = None

    def to_dict(self) -> dict:
        return {
            "itemCount": self.item_count,
            "totalQuantity": float(self.total_quantity),
            "subtotal": float(self.subtotal),
            "consumerSubtotal": float(self.consumer_subtotal),
            "totalIPI": float(self.total_ipi),
            "totalST": float(self.total_st),
            "total": float(self.total),
            "consumerTotal": float(self.consumer_total),
            "freight": float(self.freight),
            "grandTotal": float(self.grand_total),
            "consumerGrandTotal": float(self.consumer_grand_total),
            "profitability": self.profitability.to_dict() if self.profitability else None,
        }

def compute_profitability(grand_total: Decimal, consumer_grand_total: Decimal, overcharge) -> Profitability:
    """Comissão do revendedor sobre a diferença entre preço consumidor e preço de venda."""
    margin = money(consumer_grand_total - grand_total)
    desc_fp = money(consumer_grand_total * to_decimal(overcharge) / 100)
    desc_fed = money(margin * FEDERAL_TAX_RATE)
    desc_icms = money(margin * ICMS_RATE)
    commission = margin - desc_fed - desc_fp - desc_icms
    percent = money(commission / consumer_grand_total * 100) if consumer_grand_total else money(ZERO)
    return Profitability(margin, desc_fp, desc_fed, desc_icms, commission, percent)

def compute_totals(items: Iterable[PricedItem], freight=ZERO, reseller_id: int | None = None,
                   overcharge=None) -> CartTotals:
    """Agrega os itens do lead.

    Rentabilidade só é calculada quando há revendedor (cCC > 0) e o acréscimo da
    forma de pagamento é conhecido; caso contrário fica None.
    """
    count = 0
    qty = ZERO
    subtotal = ZERO
    consumer_subtotal = ZERO
    ipi = ZERO
    st = ZERO
    for item in items:
        quantity = to_decimal(item.quantity)
        price = to_decimal(item.price)
        consumer = to_decimal(item.consumer_price) if item.consumer_price is not None else price
        count += 1
        qty += quantity
        subtotal += price * quantity
        consumer_subtotal += consumer * quantity
        ipi += to_decimal(item.ipi)
        st += to_decimal(item.st)

    subtotal, consumer_subtotal = money(subtotal), money(consumer_subtotal)
    ipi, st, freight = money(ipi), money(st), money(freight)
    total = subtotal + ipi + st
    consumer_total = consumer_subtotal + ipi + st
    grand_total = total + freight
    consumer_grand_total = consumer_total + freight

    profitability = None
    if reseller_id and reseller_id > 0 and overcharge is not None:
        profitability = compute_profitability(grand_total, consumer_grand_total, overcharge)

    return CartTotals(
        item_count=count,
        total_quantity=qty,
        subtotal=subtotal,
        consumer_subtotal=consumer_subtotal,
        total_ipi=ipi,
        total_st=st,
        total=total,
        consumer_total=consumer_total,
        freight=freight,
        grand_total=grand_total,
        consumer_grand_total=consumer_grand_total,
        profitability=profitability,
    )
