"""Cliente do serviço externo de pricing (POST /pricing/run)."""
from __future__ import annotations
from typing import Any
import httpx
from kink import di
from ...core import errors
from ...core.settings import Settings
from ...core.logging import get_logger, get_trace_id

log = get_logger()

SERVICE = "pricing"

class PricingClient:
    """Repassa o payload ao serviço de pricing com timeout fixo e sem retries."""
    def __init__(self, settings: Settings | None = None, transport: httpx.BaseTransport | None = None):
        self.s = settings or di[Settings]
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.s.pricing_timeout_s, transport=self._transport)

    def run(self, payload: dict) -> Any:
        headers = {"X-API-Key": self.s.pricing_api_key, "X-Trace-Id": get_trace_id()}
        try:
            with self._client() as cli:
                r = cli.post(self.s.pricing_api_url, json=payload, headers=headers)
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            log.warning("pricing_unavailable", url=self.s.pricing_api_url, error=exc.__class__.__name__)
            raise errors.service_unavailable(SERVICE) from exc
        if r.status_code // 100 != 2:
            body: Any = r.text[:500]
            if "application/json" in r.headers.get("content-type", ""):
                body = r.json()
            log.warning("pricing_upstream_error", status=r.status_code)
            raise errors.external_service(SERVICE, r.status_code, body)
        log.info("pricing_ok", status=r.status_code)
        return r.json()
