"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All settings come from MAILINGLST_* environment variables or .env
    - get_settings() is cached (lru_cache): single instance per process
    - Bind addresses are validated at load time: "[host]:port", empty host = all interfaces

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Short legacy names (MAILINGLST_DB, MAILINGLST_BIND_GRPC) accepted as aliases
    - Defaults work out-of-the-box: local SQLite file, JSON on :8080, RPC on :8081
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ALL_INTERFACES = "0.0.0.0"


def split_bind_address(bind: str) -> tuple[str, int]:
    """Split "[host]:port" into (host, port). Raises ValueError when malformed."""
    host, sep, port_text = bind.strip().rpartition(":")
    if not sep:
        raise ValueError(f"bind address '{bind}' must look like [host]:port")
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"bind address '{bind}' has a non-numeric port")
    if not 0 < port < 65536:
        raise ValueError(f"bind address '{bind}' port out of range")
    return host.strip("[]") or ALL_INTERFACES, port


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MAILINGLST_",
        case_sensitive=False, populate_by_name=True, extra="ignore",
    )

    # Database
    database_url: str = Field(
        "sqlite+aiosqlite:///data.sqlite",
        validation_alias=AliasChoices(
            "MAILINGLST_DB", "MAILINGLST_DATABASE_URL",
        ),
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Bare paths become SQLite files; postgresql:// needs the asyncpg driver."""
        if not isinstance(v, str):
            return v
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if "://" not in v:
            return f"sqlite+aiosqlite:///{v}"
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Listeners
    bind_json: str = ":8080"
    bind_rpc: str = Field(
        ":8081",
        validation_alias=AliasChoices(
            "MAILINGLST_BIND_RPC", "MAILINGLST_BIND_GRPC",
        ),
    )

    @field_validator("bind_json", "bind_rpc")
    @classmethod
    def check_bind_address(cls, v: str) -> str:
        split_bind_address(v)
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    access_log: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
