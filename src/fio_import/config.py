"""Configuración desde variables de entorno FIO_BCO_* (y .env opcional)."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    tenant: str = Field(default="", description="Tenant dueño de las cuentas y transacciones")
    log_level: str = Field(default="DEBUG", description="DEBUG, INFO, WARNING, ERROR")
    log_json: bool = Field(default=False, description="JSON en vez de consola coloreada")

    model_config = SettingsConfigDict(env_prefix="FIO_BCO_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("tenant", mode="after")
    @classmethod
    def strip_tenant(cls, v: str) -> str:
        return v.strip()

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.strip().upper() or "DEBUG"


@lru_cache
def get_settings() -> Settings:
    return Settings()
