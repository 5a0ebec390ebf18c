"""Runtime settings, read from ``CAFE_LEDGER_*`` environment variables.

A ``.env`` file in the working directory is honoured as well.  Set
``CAFE_LEDGER_LOG_FILE=none`` to log to the console only.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cafe_ledger.application.delete_product import ProductDeletionPolicy
from cafe_ledger.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD

# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    data_dir: Path = PROJECT_ROOT / "data"
    products_key: str = "cafeProducts"
    sales_key: str = "cafeSales"
    customers_key: str = "cafeCustomers"
    low_stock_threshold: int = Field(default=DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    product_deletion_policy: ProductDeletionPolicy = ProductDeletionPolicy.RESTRICT
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Path | None = PROJECT_ROOT / ".logs" / "cafe_ledger.log"

    model_config = SettingsConfigDict(
        env_prefix="CAFE_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case (``debug`` -> ``DEBUG``)."""
        return v.strip().upper() if isinstance(v, str) else v
