"""Serviço de leads: criação, leitura, edição parcial, exclusão lógica e listagem."""
from __future__ import annotations
import math
from typing import Any
from kink import di
from ..core import errors
from ..core.filters import LeadFilter
from ..core.logging import get_logger
from ..core.settings import Settings
from ..ports.interfaces import LeadCreateDTO, LeadUpdateDTO, LeadListQuery
from ..repo import leads as lead_repo, metadata as meta_repo, audit
from ..repo.models import Lead, ORDER_TYPE, LEAD_TYPE
from .access import ensure_lead_access, is_manager
from .serializers import lead_to_dict, num
from . import history

log = get_logger()

SEGMENT_SLUGS = {"machines": 1, "bearings": 2, "parts": 3, "auto": 5, "moto": 6}
DEFAULT_TERMS = "n:30:30"

REMARK_COLUMNS = {
    "finance": "remarks_finance",
    "logistic": "remarks_logistic",
    "nfe": "remarks_nfe",
    "obs": "remarks_obs",
    "manager": "remarks_manager",
}

def resolve_segment(raw: int | str | None, fallback: int | None = None) -> int | None:
    """Inteiro é usado direto; slug é mapeado; texto numérico é convertido."""
    if raw is None or raw == "":
        return fallback
    if isinstance(raw, int):
        return raw
    mapped = SEGMENT_SLUGS.get(raw.lower())
    if mapped:
        return mapped
    return int(raw) if raw.strip().isdigit() else fallback

def resolve_payment_terms(s, raw: int | str | None) -> tuple[int | None, str | None]:
    """(id, texto) do prazo. Id numérico é buscado em terms; texto livre é gravado como veio."""
    if raw is None or raw == "":
        return None, None
    if isinstance(raw, str) and raw.strip().isdigit():
        raw = int(raw.strip())
    if isinstance(raw, int):
        return raw, meta_repo.term_string(s, raw)
    return None, raw

def _remark_fields(remarks: dict | None) -> dict[str, str]:
    return {REMARK_COLUMNS[k]: (v or "") for k, v in (remarks or {}).items()}

def load_lead(s, lead_id: int, user: dict, for_update: bool = False) -> Lead:
    lead = lead_repo.find_by_id(s, lead_id, for_update=for_update)
    if lead is None:
        raise errors.lead_not_found(lead_id)
    ensure_lead_access(user, lead)
    return lead

def load_open_lead(s, lead_id: int, user: dict) -> Lead:
    """Lead existente, acessível e ainda não convertido (409 se convertido).

    A linha fica travada até o commit: a conversão não intercala com a escrita.
    """
    lead = load_lead(s, lead_id, user, for_update=True)
    if lead.type == ORDER_TYPE:
        raise errors.lead_already_converted(lead_id)
    return lead

def create_lead(body: dict, user: dict, ip: str | None = None) -> tuple[dict, list[str]]:
    dto = LeadCreateDTO.model_validate(body)
    seller_id = dto.seller_id or dto.user_id
    Session = di["session_factory"]
    with Session() as s, s.begin():
        seller_segment = SEGMENT_SLUGS.get((meta_repo.seller_segment_slug(s, seller_id) or "").lower())
        raw_terms = dto.payment_terms_id if dto.payment_terms_id is not None else dto.payment_terms
        term_id, term_str = resolve_payment_terms(s, raw_terms)
        values: dict[str, Any] = {
            "customer_id": dto.customer_id,
            "user_id": dto.user_id,
            "seller_id": seller_id,
            "segment": resolve_segment(dto.segment, seller_segment),
            "nat_op": dto.nat_op,
            "emit_unity": dto.emit_unity,
            "log_unity": dto.log_unity or dto.emit_unity,
            "transporter_id": dto.transporter_id,
            "payment_type": dto.payment_type,
            "payment_terms_id": term_id or 0,
            "payment_terms": term_str or DEFAULT_TERMS,
            "freight": dto.freight,
            "freight_type": dto.freight_type,
            "delivery_date": dto.delivery_date,
            "buyer": dto.buyer or None,
            "purchase_order": dto.purchase_order or None,
            **{col: "" for col in REMARK_COLUMNS.values()},
            **_remark_fields(dto.remarks.model_dump(exclude_unset=True) if dto.remarks else None),
        }
        lead = lead_repo.create(s, values)
        data = lead_to_dict(lead)
    log.info("lead_created", lead_id=data["id"], customer_id=dto.customer_id, user_id=user.get("userId"))
    warnings = history.record(audit.LEAD_CREATE, user, data["id"], new=data, ip=ip)
    return data, warnings

def get_lead(lead_id: int, user: dict) -> dict:
    Session = di["session_factory"]
    with Session() as s:
        return lead_to_dict(load_lead(s, lead_id, user))

def update_lead(lead_id: int, body: dict, user: dict, ip: str | None = None) -> tuple[dict, list[str]]:
    """Edição parcial: só colunas presentes no corpo são gravadas."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        lead = load_open_lead(s, lead_id, user)
        dto = LeadUpdateDTO.model_validate(body)
        sent = dto.model_dump(exclude_unset=True)
        before = lead_to_dict(lead)

        fields: dict[str, Any] = {}
        for key in ("customer_id", "nat_op", "emit_unity", "log_unity", "transporter_id",
                    "payment_type", "freight", "freight_type"):
            if sent.get(key) is not None:
                fields[key] = sent[key]
        for key in ("delivery_date", "buyer", "purchase_order"):
            if key in sent:
                fields[key] = sent[key]
        if "segment" in sent:
            fields["segment"] = resolve_segment(sent["segment"])
        if "payment_terms" in sent or "payment_terms_id" in sent:
            raw = sent["payment_terms_id"] if "payment_terms_id" in sent else sent["payment_terms"]
            term_id, term_str = resolve_payment_terms(s, raw)
            fields["payment_terms_id"] = term_id or 0
            fields["payment_terms"] = term_str or lead.payment_terms
        fields.update(_remark_fields(sent.get("remarks")))

        lead = lead_repo.update_fields(s, lead, fields)
        after = lead_to_dict(lead)
    warnings = history.record(audit.LEAD_UPDATE, user, lead_id, old=before, new=after, ip=ip)
    return after, warnings

def delete_lead(lead_id: int, user: dict, ip: str | None = None) -> list[str]:
    """Exclusão lógica (cType=99). Lead convertido não pode ser excluído."""
    Session = di["session_factory"]
    with Session() as s, s.begin():
        lead = load_open_lead(s, lead_id, user)
        before = lead_to_dict(lead)
        lead_repo.soft_delete(s, lead_id)
    return history.record(audit.LEAD_DELETE, user, lead_id, old=before, ip=ip)

def build_filter(query: LeadListQuery, user: dict) -> LeadFilter:
    flt = LeadFilter(
        customer_id=query.customer_id,
        user_id=query.user_id,
        seller_id=query.seller_id,
        type=query.type if query.type is not None else LEAD_TYPE,
        segment=query.segment,
        status=query.status,
        date_from=query.date_from,
        date_to=query.date_to,
        search=query.q,
    )
    if not is_manager(user):
        flt = flt.scoped_to(user.get("userId"))
    return flt

def page_size(requested: int | None) -> int:
    """Tamanho de página: padrão e teto vêm das configurações."""
    s = di[Settings]
    if requested is None:
        return s.default_page_size
    if requested > s.max_page_size:
        raise errors.validation([{"field": "limit", "message": f"deve ser no máximo {s.max_page_size}"}])
    return requested

def list_leads(args: dict, user: dict) -> tuple[list[dict], dict, dict]:
    """(leads, paginação, resumo)."""
    query = LeadListQuery.model_validate(args)
    limit = page_size(query.limit)
    flt = build_filter(query, user)
    Session = di["session_factory"]
    with Session() as s:
        rows, summary = lead_repo.list_leads(s, flt, query.page, limit, query.sort, query.sort_dir)
        data = [
            {**lead_to_dict(r["lead"]), "totalValue": num(r["total_value"]), "itemCount": r["item_count"]}
            for r in rows
        ]
    total = summary["total"]
    pagination = {
        "page": query.page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit) if total else 0,
    }
    return data, pagination, {
        "totalValue": float(summary["total_value"] or 0),
        "convertedCount": summary["converted_count"],
    }

def lead_history(lead_id: int, user: dict) -> list[dict]:
    Session = di["session_factory"]
    with Session() as s:
        load_lead(s, lead_id, user)
    return history.timeline(lead_id)
