"""Configurações Pydantic Settings para a aplicação."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """Configurações da aplicação. Carrega de env e .env.

    Todas as credenciais devem vir via env. Nunca hardcode.
    """
    model_config = SettingsConfigDict(env_file=".env", env_prefix="LA_", case_sensitive=False)

    # Flask
    flask_debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    environment: str = Field(default="production", description="development|production")

    # DB
    database_url: str = Field(..., description="URL do MySQL legado, ex: mysql+pymysql://user:pass@db:3306/mak")

    # Auth (apenas verificação de bearer token)
    jwt_secret: str = Field(..., description="Segredo HS256 compartilhado com o serviço de auth")
    jwt_algorithm: str = Field(default="HS256")
    manager_level: int = Field(default=4, description="level > manager_level enxerga todos os leads")

    # Metadados
    metadata_cache_ttl_s: int = Field(default=3600)

    # Pricing externo
    pricing_api_url: str = Field(default="https://csuite.internut.com.br/pricing/run")
    pricing_api_key: str = Field(default="")
    pricing_timeout_s: float = Field(default=30)

    # Paginação
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
