import logging
import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field


class LedgerConf(BaseModel):
    currency_symbol: str = "$"
    recent_limit: int = Field(default=10, ge=0)


class LoggingConf(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerConf(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseModel):
    ledger: LedgerConf = LedgerConf()
    logging: LoggingConf = LoggingConf()
    server: ServerConf = ServerConf()


def _apply_env_overrides(cfg: dict) -> dict:
    def set_in(section: str, key: str, value: Any):
        cfg.setdefault(section, {})[key] = value

    if os.getenv("SPLITLEDGER_CURRENCY_SYMBOL") is not None:
        set_in("ledger", "currency_symbol", os.getenv("SPLITLEDGER_CURRENCY_SYMBOL"))
    if os.getenv("SPLITLEDGER_RECENT_LIMIT"):
        set_in("ledger", "recent_limit", os.getenv("SPLITLEDGER_RECENT_LIMIT"))

    if os.getenv("SPLITLEDGER_LOG_LEVEL"):
        set_in("logging", "level", os.getenv("SPLITLEDGER_LOG_LEVEL").upper())

    if os.getenv("SPLITLEDGER_HOST"):
        set_in("server", "host", os.getenv("SPLITLEDGER_HOST"))
    if os.getenv("SPLITLEDGER_PORT"):
        set_in("server", "port", os.getenv("SPLITLEDGER_PORT"))
    cors_env = os.getenv("SPLITLEDGER_CORS_ORIGINS")
    if cors_env:
        set_in("server", "cors_origins", [x.strip() for x in cors_env.split(",") if x.strip()])

    return cfg


def load_settings() -> Settings:
    """Build settings from defaults overlaid with SPLITLEDGER_* environment variables."""
    return Settings(**_apply_env_overrides({}))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Settings) -> None:
    """Install the root handler unless the host application already has one."""
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.logging.level,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )
