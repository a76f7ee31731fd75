from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)


def _float_from_env(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("%s is not a valid number (got %r); defaulting to %.2f", name, raw_value, default)
        return default
    if value < 0:
        logger.warning("%s cannot be negative; defaulting to %.2f", name, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./golfpot.db"
    log_level: str = "INFO"
    default_point_value: float = 1.0
    default_fbt_value: float = 10.0


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        log_level=(os.getenv("LOG_LEVEL") or Settings.log_level).upper(),
        default_point_value=_float_from_env("GOLFPOT_DEFAULT_POINT_VALUE", Settings.default_point_value),
        default_fbt_value=_float_from_env("GOLFPOT_DEFAULT_FBT_VALUE", Settings.default_fbt_value),
    )
