"""Modelos SQLAlchemy sobre o schema legado (sCart/icart/hoje/hist e referências).

Os nomes de tabela e coluna são os do MySQL legado; os atributos Python usam snake_case.
"""
from __future__ import annotations
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Numeric, JSON, BigInteger, TIMESTAMP, Date, SmallInteger, Index

LEAD_TYPE = 1
ORDER_TYPE = 2
DELETED_TYPE = 99

class Base(DeclarativeBase):
    """Base declarativa."""
    pass

# ---------- Referências (somente leitura para este serviço) ----------

class Customer(Base):
    __tablename__ = "clientes"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column("nome", String(120))
    address: Mapped[str | None] = mapped_column("ender", String(200))
    city: Mapped[str | None] = mapped_column("cidade", String(80))
    state: Mapped[str | None] = mapped_column("estado", String(2))
    phone: Mapped[str | None] = mapped_column("fone", String(40))

class Product(Base):
    __tablename__ = "inv"
    id: Mapped[int] = mapped_column(primary_key=True)
    model: Mapped[str | None] = mapped_column("modelo", String(80))
    brand: Mapped[str | None] = mapped_column("marca", String(80))
    name: Mapped[str | None] = mapped_column("nome", String(200))
    list_price: Mapped[Decimal] = mapped_column("revenda", Numeric(14, 4), default=0)

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(primary_key=True)
    user: Mapped[str] = mapped_column(String(60))
    nick: Mapped[str | None] = mapped_column(String(60))
    segment_slug: Mapped[str | None] = mapped_column("segmento", String(30))

class Segment(Base):
    __tablename__ = "segments"
    id: Mapped[int] = mapped_column("id_segments", primary_key=True)
    name: Mapped[str] = mapped_column("segment", String(60))

class Transporter(Base):
    __tablename__ = "transportadora"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column("nome", String(120))
    active: Mapped[int] = mapped_column("ativa", SmallInteger, default=1)

class Nop(Base):
    __tablename__ = "nop"
    id: Mapped[int] = mapped_column("id_nop", primary_key=True)
    name: Mapped[str] = mapped_column("nop", String(120))
    kind: Mapped[str | None] = mapped_column("tipo", String(20))

class PaymentType(Base):
    __tablename__ = "payment_types"
    id: Mapped[int] = mapped_column("id_payment_type", primary_key=True)
    name: Mapped[str] = mapped_column("payment_type", String(60))
    overcharge: Mapped[Decimal | None] = mapped_column(Numeric(6, 2))

class PaymentTerm(Base):
    __tablename__ = "terms"
    id: Mapped[int] = mapped_column(primary_key=True)
    terms: Mapped[str] = mapped_column(String(40))
    nat_op: Mapped[int | None] = mapped_column(Integer)
    active: Mapped[int] = mapped_column("ativo", SmallInteger, default=1)

class EmitUnit(Base):
    __tablename__ = "Emitentes"
    id: Mapped[int] = mapped_column("EmitentePOID", primary_key=True)
    name: Mapped[str] = mapped_column("Fantasia", String(120))
    uf: Mapped[str | None] = mapped_column("UF", String(2))

# ---------- Lead / carrinho ----------

class Lead(Base):
    __tablename__ = "sCart"
    id: Mapped[int] = mapped_column("cSCart", primary_key=True)
    created_at: Mapped[datetime] = mapped_column("dCart", TIMESTAMP(timezone=False), default=datetime.now)
    segment: Mapped[int | None] = mapped_column("cSegment", Integer)
    nat_op: Mapped[int] = mapped_column("cNatOp", Integer, default=27)
    customer_id: Mapped[int] = mapped_column("cCustomer", Integer)
    user_id: Mapped[int] = mapped_column("cUser", Integer)
    seller_id: Mapped[int] = mapped_column("cSeller", Integer)
    reseller_id: Mapped[int] = mapped_column("cCC", Integer, default=0)
    payment_type: Mapped[int] = mapped_column("cPaymentType", Integer, default=2)
    payment_terms_id: Mapped[int] = mapped_column("vPaymentTerms", Integer, default=0)
    payment_terms: Mapped[str] = mapped_column("cPaymentTerms", String(40), default="n:30:30")
    transporter_id: Mapped[int] = mapped_column("cTransporter", Integer, default=9)
    freight: Mapped[Decimal] = mapped_column("vFreight", Numeric(12, 2), default=Decimal("0"))
    freight_type: Mapped[int] = mapped_column("vFreightType", Integer, default=1)
    emit_unity: Mapped[int] = mapped_column("cEmitUnity", Integer, default=1)
    log_unity: Mapped[int] = mapped_column("cLogUnity", Integer, default=1)
    updated: Mapped[int] = mapped_column("cUpdated", SmallInteger, default=0)
    delivery_date: Mapped[date | None] = mapped_column("dDelivery", Date)
    remarks_finance: Mapped[str] = mapped_column("xRemarksFinance", String(500), default="")
    remarks_logistic: Mapped[str] = mapped_column("xRemarksLogistic", String(500), default="")
    remarks_nfe: Mapped[str] = mapped_column("xRemarksNFE", String(500), default="")
    remarks_obs: Mapped[str] = mapped_column("xRemarksOBS", String(500), default="")
    remarks_manager: Mapped[str] = mapped_column("xRemarksManager", String(500), default="")
    order_web: Mapped[str | None] = mapped_column("cOrderWeb", String(20))
    type: Mapped[int] = mapped_column("cType", SmallInteger, default=LEAD_TYPE)
    buyer: Mapped[str | None] = mapped_column("xBuyer", String(120))
    purchase_order: Mapped[str | None] = mapped_column("cPurchaseOrder", String(60))
    authorized: Mapped[int] = mapped_column("cAuthorized", SmallInteger, default=0)
    source: Mapped[int] = mapped_column("cSource", Integer, default=0)
    commission: Mapped[Decimal | None] = mapped_column("vComission", Numeric(12, 2))

    customer: Mapped[Customer | None] = relationship(
        primaryjoin="foreign(Lead.customer_id) == Customer.id", lazy="joined", viewonly=True,
    )

    __table_args__ = (
        Index("ix_scart_customer", "cCustomer"),
        Index("ix_scart_user_seller", "cUser", "cSeller"),
    )

class CartItem(Base):
    __tablename__ = "icart"
    id: Mapped[int] = mapped_column("cCart", primary_key=True)
    lead_id: Mapped[int] = mapped_column("cSCart", Integer, index=True)
    product_id: Mapped[int] = mapped_column("cProduct", Integer)
    quantity: Mapped[Decimal] = mapped_column("qProduct", Numeric(12, 3))
    price: Mapped[Decimal] = mapped_column("vProduct", Numeric(14, 4))
    consumer_price: Mapped[Decimal] = mapped_column("vProductCC", Numeric(14, 4), default=Decimal("0"))
    original_price: Mapped[Decimal] = mapped_column("vProductOriginal", Numeric(14, 4), default=Decimal("0"))
    times: Mapped[int] = mapped_column("tProduct", Integer, default=1)
    ipi: Mapped[Decimal] = mapped_column("vIPI", Numeric(12, 2), default=Decimal("0"))
    st: Mapped[Decimal] = mapped_column("vCST", Numeric(12, 2), default=Decimal("0"))
    ttd: Mapped[int] = mapped_column("TTD", Integer, default=0)
    inquiry_date: Mapped[datetime] = mapped_column("dInquiry", TIMESTAMP(timezone=False), default=datetime.now)

    product: Mapped[Product | None] = relationship(
        primaryjoin="foreign(CartItem.product_id) == Product.id", lazy="joined", viewonly=True,
    )

# ---------- Pedido (hoje / hist) ----------

class Order(Base):
    __tablename__ = "hoje"
    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column("data", TIMESTAMP(timezone=False), default=datetime.now)
    nop: Mapped[int | None] = mapped_column(Integer)
    customer_id: Mapped[int | None] = mapped_column("idcli", Integer, index=True)
    reseller_id: Mapped[int] = mapped_column("idcom", Integer, default=0)
    emitter_id: Mapped[int | None] = mapped_column("emissor", Integer)
    seller_id: Mapped[int | None] = mapped_column("vendedor", Integer)
    payment_type: Mapped[int | None] = mapped_column("pg", Integer)
    terms: Mapped[int] = mapped_column(Integer, default=0)
    payment_terms: Mapped[str | None] = mapped_column("fprazo", String(40))
    deadline: Mapped[int] = mapped_column("prazo", Integer, default=204)
    transporter_id: Mapped[int | None] = mapped_column("idtr", Integer)
    freight: Mapped[Decimal] = mapped_column("frete", Numeric(12, 2), default=Decimal("0"))
    emit_unity: Mapped[int | None] = mapped_column("EmissorPOID", Integer)
    log_unity: Mapped[int | None] = mapped_column("UnidadeLogistica", Integer)
    delivery_date: Mapped[date | None] = mapped_column("datae", Date)
    crossover: Mapped[int] = mapped_column(Integer, default=0)
    obs: Mapped[str] = mapped_column(String(2000), default="")
    obs_finance: Mapped[str] = mapped_column("obsfinanc", String(500), default="")
    obs_logistic: Mapped[str] = mapped_column("obslogistic", String(500), default="")
    obs_nfe: Mapped[str] = mapped_column("obsnfe", String(500), default="")
    base_value: Mapped[Decimal] = mapped_column("valor_base", Numeric(14, 2), default=Decimal("0"))
    st_value: Mapped[Decimal] = mapped_column("valor_st", Numeric(14, 2), default=Decimal("0"))
    ipi_value: Mapped[Decimal] = mapped_column("valor_ipi", Numeric(14, 2), default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column("valor", Numeric(14, 2), default=Decimal("0"))
    usvale: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0"))
    reseller_commission: Mapped[Decimal] = mapped_column("comissao_revenda", Numeric(12, 2), default=Decimal("0"))
    entrada: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    spedido: Mapped[int] = mapped_column(Integer, default=0)
    source: Mapped[int] = mapped_column(Integer, default=0)

    customer: Mapped[Customer | None] = relationship(
        primaryjoin="foreign(Order.customer_id) == Customer.id", lazy="joined", viewonly=True,
    )
    transporter: Mapped[Transporter | None] = relationship(
        primaryjoin="foreign(Order.transporter_id) == Transporter.id", lazy="joined", viewonly=True,
    )
    items: Mapped[list["OrderItem"]] = relationship(
        primaryjoin="foreign(OrderItem.order_id) == Order.id", order_by="OrderItem.id",
        lazy="selectin", viewonly=True,
    )

class OrderItem(Base):
    __tablename__ = "hist"
    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column("pedido", Integer, index=True)
    customer_id: Mapped[int | None] = mapped_column("idcli", Integer)
    product_id: Mapped[int] = mapped_column("isbn", Integer)
    quantity: Mapped[Decimal] = mapped_column("quant", Numeric(12, 3))
    times: Mapped[int] = mapped_column("vezes", Integer, default=1)
    value: Mapped[Decimal] = mapped_column("valor", Numeric(14, 2))
    base_value: Mapped[Decimal] = mapped_column("valor_base", Numeric(14, 4))
    price: Mapped[Decimal] = mapped_column("vProduct", Numeric(14, 4))
    consumer_price: Mapped[Decimal] = mapped_column("vProductCC", Numeric(14, 4))
    ipi_rate: Mapped[Decimal] = mapped_column("aliquota_ipi", Numeric(6, 2), default=Decimal("0"))
    ipi_value: Mapped[Decimal] = mapped_column("valor_ipi", Numeric(12, 2), default=Decimal("0"))
    st_value: Mapped[Decimal] = mapped_column("valor_st", Numeric(12, 2), default=Decimal("0"))
    entrada: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    list_price: Mapped[Decimal] = mapped_column("tabela", Numeric(14, 4))
    stock: Mapped[int] = mapped_column("estoque", Integer, default=0)
    obs: Mapped[str] = mapped_column(String(200), default="")
    ttd: Mapped[int] = mapped_column("TTD", Integer, default=0)

    product: Mapped[Product | None] = relationship(
        primaryjoin="foreign(OrderItem.product_id) == Product.id", lazy="joined", viewonly=True,
    )

# ---------- Auditoria ----------

class AuditLog(Base):
    __tablename__ = "audit_log"
    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    action: Mapped[str] = mapped_column(String(50), index=True)
    user_id: Mapped[int | None] = mapped_column(Integer)
    user_name: Mapped[str | None] = mapped_column(String(100))
    resource_type: Mapped[str | None] = mapped_column(String(50))
    resource_id: Mapped[str | None] = mapped_column(String(50))
    old_value: Mapped[dict | None] = mapped_column(JSON)
    new_value: Mapped[dict | None] = mapped_column(JSON)
    ip_address: Mapped[str | None] = mapped_column(String(45))
    request_id: Mapped[str | None] = mapped_column(String(64))
    extra: Mapped[dict | None] = mapped_column("metadata", JSON)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=False), default=datetime.now)

    __table_args__ = (Index("idx_resource", "resource_type", "resource_id"),)
