"""Migração inicial: tabelas legadas usadas pelo serviço (bancos de dev/teste) e audit_log."""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "clientes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("nome", sa.String(120)),
        sa.Column("ender", sa.String(200)),
        sa.Column("cidade", sa.String(80)),
        sa.Column("estado", sa.String(2)),
        sa.Column("fone", sa.String(40)),
    )
    op.create_table(
        "inv",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("modelo", sa.String(80)),
        sa.Column("marca", sa.String(80)),
        sa.Column("nome", sa.String(200)),
        sa.Column("revenda", sa.Numeric(14, 4), nullable=False, server_default="0"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user", sa.String(60), nullable=False),
        sa.Column("nick", sa.String(60)),
        sa.Column("segmento", sa.String(30)),
    )
    op.create_table(
        "segments",
        sa.Column("id_segments", sa.Integer, primary_key=True),
        sa.Column("segment", sa.String(60), nullable=False),
    )
    op.create_table(
        "transportadora",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("nome", sa.String(120), nullable=False),
        sa.Column("ativa", sa.SmallInteger, nullable=False, server_default="1"),
    )
    op.create_table(
        "nop",
        sa.Column("id_nop", sa.Integer, primary_key=True),
        sa.Column("nop", sa.String(120), nullable=False),
        sa.Column("tipo", sa.String(20)),
    )
    op.create_table(
        "payment_types",
        sa.Column("id_payment_type", sa.Integer, primary_key=True),
        sa.Column("payment_type", sa.String(60), nullable=False),
        sa.Column("overcharge", sa.Numeric(6, 2)),
    )
    op.create_table(
        "terms",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("terms", sa.String(40), nullable=False),
        sa.Column("nat_op", sa.Integer),
        sa.Column("ativo", sa.SmallInteger, nullable=False, server_default="1"),
    )
    op.create_table(
        "Emitentes",
        sa.Column("EmitentePOID", sa.Integer, primary_key=True),
        sa.Column("Fantasia", sa.String(120), nullable=False),
        sa.Column("UF", sa.String(2)),
    )
    op.create_table(
        "sCart",
        sa.Column("cSCart", sa.Integer, primary_key=True),
        sa.Column("dCart", sa.TIMESTAMP(timezone=False)),
        sa.Column("cSegment", sa.Integer),
        sa.Column("cNatOp", sa.Integer, nullable=False, server_default="27"),
        sa.Column("cCustomer", sa.Integer, nullable=False),
        sa.Column("cUser", sa.Integer, nullable=False),
        sa.Column("cSeller", sa.Integer, nullable=False),
        sa.Column("cCC", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cPaymentType", sa.Integer, nullable=False, server_default="2"),
        sa.Column("vPaymentTerms", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cPaymentTerms", sa.String(40), nullable=False, server_default="n:30:30"),
        sa.Column("cTransporter", sa.Integer, nullable=False, server_default="9"),
        sa.Column("vFreight", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("vFreightType", sa.Integer, nullable=False, server_default="1"),
        sa.Column("cEmitUnity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("cLogUnity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("cUpdated", sa.SmallInteger, nullable=False, server_default="0"),
        sa.Column("dDelivery", sa.Date),
        sa.Column("xRemarksFinance", sa.String(500), nullable=False, server_default=""),
        sa.Column("xRemarksLogistic", sa.String(500), nullable=False, server_default=""),
        sa.Column("xRemarksNFE", sa.String(500), nullable=False, server_default=""),
        sa.Column("xRemarksOBS", sa.String(500), nullable=False, server_default=""),
        sa.Column("xRemarksManager", sa.String(500), nullable=False, server_default=""),
        sa.Column("cOrderWeb", sa.String(20)),
        sa.Column("cType", sa.SmallInteger, nullable=False, server_default="1"),
        sa.Column("xBuyer", sa.String(120)),
        sa.Column("cPurchaseOrder", sa.String(60)),
        sa.Column("cAuthorized", sa.SmallInteger, nullable=False, server_default="0"),
        sa.Column("cSource", sa.Integer, nullable=False, server_default="0"),
        sa.Column("vComission", sa.Numeric(12, 2)),
    )
    op.create_index("ix_scart_customer", "sCart", ["cCustomer"])
    op.create_index("ix_scart_user_seller", "sCart", ["cUser", "cSeller"])
    op.create_table(
        "icart",
        sa.Column("cCart", sa.Integer, primary_key=True),
        sa.Column("cSCart", sa.Integer, nullable=False, index=True),
        sa.Column("cProduct", sa.Integer, nullable=False),
        sa.Column("qProduct", sa.Numeric(12, 3), nullable=False),
        sa.Column("vProduct", sa.Numeric(14, 4), nullable=False),
        sa.Column("vProductCC", sa.Numeric(14, 4), nullable=False, server_default="0"),
        sa.Column("vProductOriginal", sa.Numeric(14, 4), nullable=False, server_default="0"),
        sa.Column("tProduct", sa.Integer, nullable=False, server_default="1"),
        sa.Column("vIPI", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("vCST", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("TTD", sa.Integer, nullable=False, server_default="0"),
        sa.Column("dInquiry", sa.TIMESTAMP(timezone=False)),
    )
    op.create_table(
        "hoje",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("data", sa.TIMESTAMP(timezone=False)),
        sa.Column("nop", sa.Integer),
        sa.Column("idcli", sa.Integer, index=True),
        sa.Column("idcom", sa.Integer, nullable=False, server_default="0"),
        sa.Column("emissor", sa.Integer),
        sa.Column("vendedor", sa.Integer),
        sa.Column("pg", sa.Integer),
        sa.Column("terms", sa.Integer, nullable=False, server_default="0"),
        sa.Column("fprazo", sa.String(40)),
        sa.Column("prazo", sa.Integer, nullable=False, server_default="204"),
        sa.Column("idtr", sa.Integer),
        sa.Column("frete", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("EmissorPOID", sa.Integer),
        sa.Column("UnidadeLogistica", sa.Integer),
        sa.Column("datae", sa.Date),
        sa.Column("crossover", sa.Integer, nullable=False, server_default="0"),
        sa.Column("obs", sa.String(2000), nullable=False, server_default=""),
        sa.Column("obsfinanc", sa.String(500), nullable=False, server_default=""),
        sa.Column("obslogistic", sa.String(500), nullable=False, server_default=""),
        sa.Column("obsnfe", sa.String(500), nullable=False, server_default=""),
        sa.Column("valor_base", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("valor_st", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("valor_ipi", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("valor", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("usvale", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("comissao_revenda", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("entrada", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("spedido", sa.Integer, nullable=False, server_default="0"),
        sa.Column("source", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_table(
        "hist",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("pedido", sa.Integer, nullable=False, index=True),
        sa.Column("idcli", sa.Integer),
        sa.Column("isbn", sa.Integer, nullable=False),
        sa.Column("quant", sa.Numeric(12, 3), nullable=False),
        sa.Column("vezes", sa.Integer, nullable=False, server_default="1"),
        sa.Column("valor", sa.Numeric(14, 2), nullable=False),
        sa.Column("valor_base", sa.Numeric(14, 4), nullable=False),
        sa.Column("vProduct", sa.Numeric(14, 4), nullable=False),
        sa.Column("vProductCC", sa.Numeric(14, 4), nullable=False),
        sa.Column("aliquota_ipi", sa.Numeric(6, 2), nullable=False, server_default="0"),
        sa.Column("valor_ipi", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("valor_st", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("entrada", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tabela", sa.Numeric(14, 4), nullable=False),
        sa.Column("estoque", sa.Integer, nullable=False, server_default="0"),
        sa.Column("obs", sa.String(200), nullable=False, server_default=""),
        sa.Column("TTD", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_table(
        "audit_log",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True),
        sa.Column("action", sa.String(50), nullable=False, index=True),
        sa.Column("user_id", sa.Integer),
        sa.Column("user_name", sa.String(100)),
        sa.Column("resource_type", sa.String(50)),
        sa.Column("resource_id", sa.String(50)),
        sa.Column("old_value", sa.JSON()),
        sa.Column("new_value", sa.JSON()),
        sa.Column("ip_address", sa.String(45)),
        sa.Column("request_id", sa.String(64)),
        sa.Column("metadata", sa.JSON()),
        sa.Column("created_at", sa.TIMESTAMP(timezone=False)),
    )
    op.create_index("idx_resource", "audit_log", ["resource_type", "resource_id"])

def downgrade() -> None:
    op.drop_index("idx_resource", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_table("hist")
    op.drop_table("hoje")
    op.drop_table("icart")
    op.drop_index("ix_scart_user_seller", table_name="sCart")
    op.drop_index("ix_scart_customer", table_name="sCart")
    op.drop_table("sCart")
    for table in ("Emitentes", "terms", "payment_types", "nop", "transportadora", "segments", "users", "inv", "clientes"):
        op.drop_table(table)
