"""Trilha de auditoria (audit_log) em transação própria."""
from __future__ import annotations
from typing import Any
from kink import di
from sqlalchemy import select
from .models import AuditLog
from ..core.logging import get_logger, get_trace_id

log = get_logger()

LEAD_CREATE = "LEAD_CREATE"
LEAD_UPDATE = "LEAD_UPDATE"
LEAD_DELETE = "LEAD_DELETE"
LEAD_CONVERT = "LEAD_CONVERT"
ITEM_ADD = "ITEM_ADD"
ITEM_UPDATE = "ITEM_UPDATE"
ITEM_DELETE = "ITEM_DELETE"

def log_event(action: str, user: dict | None, resource_type: str, resource_id: Any,
              old: dict | None = None, new: dict | None = None,
              metadata: dict | None = None, ip: str | None = None) -> int:
    """Registra um evento de auditoria. Erros de banco propagam para o chamador."""
    user = user or {}
    log.info("audit", action=action, user_id=user.get("userId"), resource_type=resource_type,
             resource_id=str(resource_id), metadata=metadata)
    Session = di["session_factory"]
    with Session() as s, s.begin():
        entry = AuditLog(
            action=action,
            user_id=user.get("userId"),
            user_name=user.get("username"),
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            old_value=old,
            new_value=new,
            ip_address=ip,
            request_id=get_trace_id(),
            extra=metadata,
        )
        s.add(entry)
        s.flush()
        entry_id = entry.id
    return entry_id

def find_for_resource(resource_type: str, resource_id: Any, limit: int = 100) -> list[AuditLog]:
    """Eventos do recurso, mais recentes primeiro."""
    Session = di["session_factory"]
    with Session() as s:
        return list(s.execute(
            select(AuditLog)
            .where(AuditLog.resource_type == resource_type, AuditLog.resource_id == str(resource_id))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        ).scalars().all())
