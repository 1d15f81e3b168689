"""
Configuration de la simulation.

Les réglages sont lus dans l'environnement (préfixe VENDING_) et
validés par pydantic. Les valeurs par défaut reproduisent la
simulation de référence : trois distributeurs, quatre subscribers
de vente. Les seuils de stock ne sont pas configurables ; ils
restent des constantes du modèle.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import NonNegativeInt, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    # VENDING_MACHINE_IDS="001,002,003" : liste séparée par des virgules, pas du JSON.
    machine_ids: Annotated[list[str], NoDecode] = ["001", "002", "003"]
    sale_subscribers: NonNegativeInt = 4
    log_level: LogLevel = "INFO"
    seed: Optional[int] = None

    model_config = SettingsConfigDict(env_prefix="VENDING_", case_sensitive=False)

    @field_validator("machine_ids", mode="before")
    @classmethod
    def _split_machine_ids(cls, value):
        if isinstance(value, str):
            return [machine_id.strip() for machine_id in value.split(",") if machine_id.strip()]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
