"""Portas (interfaces) e DTOs de entrada da API."""
from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Literal, Protocol
from pydantic import BaseModel, ConfigDict, Field, field_validator

class _In(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", str_strip_whitespace=True)

class RemarksIn(_In):
    finance: str | None = None
    logistic: str | None = None
    nfe: str | None = None
    obs: str | None = None
    manager: str | None = None

class LeadCreateDTO(_In):
    """Corpo de POST /leads. Defaults seguem o cadastro legado (NOP 27, transportadora 9, boleto)."""
    customer_id: int = Field(alias="customerId")
    user_id: int = Field(alias="userId")
    seller_id: int | None = Field(default=None, alias="sellerId")
    segment: int | str | None = Field(default=None, alias="cSegment")
    nat_op: int = Field(default=27, alias="cNatOp")
    emit_unity: int = Field(default=1, alias="cEmitUnity")
    log_unity: int | None = Field(default=None, alias="cLogUnity")
    transporter_id: int = Field(default=9, alias="cTransporter")
    payment_type: int = Field(default=2, alias="paymentType")
    payment_terms: int | str | None = Field(default=None, alias="paymentTerms")
    payment_terms_id: int | str | None = Field(default=None, alias="vPaymentTerms")
    freight: Decimal = Field(default=Decimal("0"), ge=0)
    freight_type: int = Field(default=1, alias="freightType", ge=1, le=3)
    delivery_date: date | None = Field(default=None, alias="deliveryDate")
    remarks: RemarksIn | None = None
    buyer: str | None = None
    purchase_order: str | None = Field(default=None, alias="purchaseOrder")

class LeadUpdateDTO(_In):
    """Corpo de PUT /leads/:id. Apenas campos enviados são gravados."""
    customer_id: int | None = Field(default=None, alias="customerId")
    segment: int | str | None = Field(default=None, alias="cSegment")
    nat_op: int | None = Field(default=None, alias="cNatOp")
    emit_unity: int | None = Field(default=None, alias="cEmitUnity")
    log_unity: int | None = Field(default=None, alias="cLogUnity")
    transporter_id: int | None = Field(default=None, alias="cTransporter")
    payment_type: int | None = Field(default=None, alias="paymentType")
    payment_terms: int | str | None = Field(default=None, alias="paymentTerms")
    payment_terms_id: int | str | None = Field(default=None, alias="vPaymentTerms")
    freight: Decimal | None = Field(default=None, ge=0)
    freight_type: int | None = Field(default=None, alias="freightType", ge=1, le=3)
    delivery_date: date | None = Field(default=None, alias="deliveryDate")
    remarks: RemarksIn | None = None
    buyer: str | None = None
    purchase_order: str | None = Field(default=None, alias="purchaseOrder")

class ItemCreateDTO(_In):
    product_id: int = Field(alias="productId")
    quantity: Decimal = Field(gt=0)
    price: Decimal = Field(ge=0)
    consumer_price: Decimal | None = Field(default=None, alias="consumerPrice", ge=0)
    original_price: Decimal | None = Field(default=None, alias="originalPrice", ge=0)  # ignorado: vem do produto
    times: int = Field(default=1, ge=0)
    ipi: Decimal = Field(default=Decimal("0"), ge=0)
    st: Decimal = Field(default=Decimal("0"), ge=0)
    ttd: int = 0

class ItemUpdateDTO(_In):
    product_id: int | None = Field(default=None, alias="productId")
    quantity: Decimal | None = Field(default=None, gt=0)
    price: Decimal | None = Field(default=None, ge=0)
    consumer_price: Decimal | None = Field(default=None, alias="consumerPrice", ge=0)
    original_price: Decimal | None = Field(default=None, alias="originalPrice", ge=0)  # ignorado
    times: int | None = Field(default=None, ge=0)
    ipi: Decimal | None = Field(default=None, ge=0)
    st: Decimal | None = Field(default=None, ge=0)
    ttd: int | None = None

class ConvertDTO(BaseModel):
    """Corpo opcional de POST /leads/:id/convert. Campos desconhecidos são ignorados."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    remarks: RemarksIn | None = None
    transporter_id: int | None = Field(default=None, alias="cTransporter")

class LeadListQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    customer_id: int | None = Field(default=None, alias="customerId")
    q: str | None = None
    type: int | None = Field(default=None, ge=1, le=2)
    segment: str | None = Field(default=None, alias="cSegment")
    date_from: date | None = Field(default=None, alias="dateFrom")
    date_to: date | None = Field(default=None, alias="dateTo")
    status: Literal["aberto", "convertido"] | None = None
    user_id: int | None = Field(default=None, alias="userId")
    seller_id: int | None = Field(default=None, alias="sellerId")
    sort: Literal["date", "id", "total", "customer", "orderWeb", "segment"] = "date"
    sort_dir: Literal["asc", "desc"] = Field(default="desc", alias="sortDir")

    @field_validator("segment")
    @classmethod
    def _segment(cls, v: str | None) -> str | None:
        if v in (None, ""):
            return None
        if v in ("null", "sem-segmento") or v.isdigit():
            return v
        raise ValueError("segmento deve ser numérico, 'null' ou 'sem-segmento'")

class PricingRunDTO(BaseModel):
    """Payload repassado ao serviço de pricing (contrato /pricing/run)."""
    model_config = ConfigDict(extra="allow")
    org_id: int
    brand_id: int
    customer_id: int
    sku_id: int
    sku_qty: Decimal = Field(gt=0)
    order_value: Decimal | None = Field(default=None, ge=0)
    product_brand: str = ""
    product_model: str = ""
    payment_term: str | None = None
    installments: int | None = Field(default=None, ge=0)
    stock_level: int | None = None
    machine_curve: str | None = None
    order_items: list[dict] = Field(default_factory=list)

class PricingPort(Protocol):
    def run(self, payload: dict) -> dict: ...
