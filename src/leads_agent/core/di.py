"""Bootstrap do container de DI (kink)."""
from kink import di
from .settings import Settings
from .logging import get_logger
from .db import create_session_factory
from .cache import MetadataCache
from ..connectors.pricing.client import PricingClient

def bootstrap_di(settings: Settings | None = None) -> None:
    settings = settings or Settings()
    di[Settings] = settings
    di["logger"] = get_logger()
    di["session_factory"] = create_session_factory(settings.database_url)
    di[MetadataCache] = MetadataCache(ttl_s=settings.metadata_cache_ttl_s)
    di[PricingClient] = PricingClient(settings)
