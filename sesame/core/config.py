"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3001, gt=0, lt=65536)


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./sesame.db"
    echo: bool = False


class LightningSettings(BaseModel):
    """Connection details for the LND node's REST API.

    ``cert`` accepts the node's ``tls.cert`` either as PEM text or base64 of it,
    ``macaroon`` accepts hex or base64. Neither has a default.
    """

    rest_url: str = Field(min_length=1)
    cert: str = Field(min_length=1)
    macaroon: str = Field(min_length=1)
    timeout: float = Field(default=10.0, gt=0)

    @field_validator("rest_url")
    @classmethod
    def validate_rest_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("lightning.rest_url must be an http(s) URL")
        return v.rstrip("/")


class InvoiceSettings(BaseModel):
    price_tokens: int = Field(default=21_000, gt=0)
    expiry_seconds: int = Field(default=3600, gt=0)
    memo: str = "Open sesame"


class WatcherSettings(BaseModel):
    resubscribe_delay: float = Field(default=5.0, ge=0)
    max_failures: int = Field(default=12, gt=0)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = "INFO"
    log_json: bool = True

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    lightning: LightningSettings
    invoice: InvoiceSettings = InvoiceSettings()
    watcher: WatcherSettings = WatcherSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def invoice_price(self) -> int:
        return self.invoice.price_tokens


@lru_cache()
def get_settings() -> Settings:
    return Settings()
