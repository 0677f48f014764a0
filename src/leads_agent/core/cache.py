"""Cache explícito de metadados com TTL por chave.

Cada entrada guarda {value, expires_at}. Não é fonte de verdade para leads/itens,
apenas para listas de referência (NOPs, transportadoras, unidades, ...).
"""
from __future__ import annotations
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict
from .logging import get_logger

log = get_logger()

@dataclass
class CacheEntry:
    value: Any
    expires_at: float

class MetadataCache:
    """Cache em processo com get_or_load / invalidate / refresh."""

    def __init__(self, ttl_s: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_s: float | None = None) -> None:
        ttl = self.ttl_s if ttl_s is None else ttl_s
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """Retorna valor em cache ou carrega via loader e guarda com TTL padrão."""
        cached = self.get(key)
        if cached is not None:
            log.debug("cache_hit", key=key)
            return cached
        log.debug("cache_miss", key=key)
        value = loader()
        self.set(key, value)
        return value

    def refresh(self, key: str, loader: Callable[[], Any]) -> Any:
        """Recarrega a chave ignorando o valor atual."""
        value = loader()
        self.set(key, value)
        log.info("cache_refreshed", key=key)
        return value

    def invalidate(self, key: str | None = None) -> int:
        """Remove uma chave (ou todas, se key=None). Retorna quantas foram removidas."""
        with self._lock:
            if key is None:
                n = len(self._entries)
                self._entries.clear()
            else:
                n = 1 if self._entries.pop(key, None) is not None else 0
        log.info("cache_invalidated", key=key or "*", removed=n)
        return n

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)
