"""Listas de referência servidas via MetadataCache."""
from __future__ import annotations
from typing import Callable
from kink import di
from ..core.cache import MetadataCache
from ..core.logging import get_logger
from ..repo import metadata as meta_repo

log = get_logger()

LOADERS: dict[str, Callable] = {
    "nops": meta_repo.nops,
    "transporters": meta_repo.transporters,
    "payment_types": meta_repo.payment_types,
    "payment_terms": meta_repo.payment_terms,
    "units": meta_repo.units,
    "segments": meta_repo.segments,
}

def _query(key: str):
    def load():
        Session = di["session_factory"]
        with Session() as s:
            return LOADERS[key](s)
    return load

def lookup(key: str) -> list[dict]:
    """Lista cacheada por chave (nops, transporters, payment_types, ...)."""
    return di[MetadataCache].get_or_load(key, _query(key))

def refresh_all() -> list[str]:
    """Invalida o cache e recarrega todas as listas."""
    cache = di[MetadataCache]
    cache.invalidate()
    for key in LOADERS:
        cache.refresh(key, _query(key))
    return cache.keys()

def customer_transporter(customer_id: int) -> dict | None:
    Session = di["session_factory"]
    with Session() as s:
        return meta_repo.customer_transporter(s, customer_id)
