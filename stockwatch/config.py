from __future__ import annotations
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ----------------
    # Logging
    # ----------------
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str = Field("", alias="LOG_FILE")          # empty = stdout only
    log_json: bool = Field(True, alias="LOG_JSON")

    # ----------------
    # Demo stock
    # ----------------
    stock_symbol: str = Field("ACME", alias="STOCK_SYMBOL")
    demo_prices_csv: str = Field("5.0,1.0", alias="DEMO_PRICES")

    @property
    def demo_prices(self) -> List[float]:
        return [float(x) for x in _split_csv(self.demo_prices_csv)]

    # ----------------
    # Dispatch
    # ----------------
    dispatch_timeout_seconds: Optional[float] = Field(None, ge=0, alias="DISPATCH_TIMEOUT_SECONDS")
    thread_safe: bool = Field(False, alias="THREAD_SAFE")

    # ----------------
    # Pydantic settings
    # ----------------
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def _split_csv(s: str | None) -> List[str]:
    if not s:
        return []
    return [x.strip() for x in s.split(",") if x.strip()]
