"""Application settings.

Loaded from ``STOREFRONT_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repo root when installed in editable mode.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """
    Attributes:
        data_dir: directory holding the JSON data files
        log_level: minimum level for structlog output
        log_json: render log lines as JSON instead of console text
        slug_max_attempts: numbered suffixes probed before a random suffix
        cart_max_quantity: per-product cap in a cart when stock allows more
        tax_rate: tax charged on the order subtotal at checkout
        flat_shipping: shipping charged per order
        currency: ISO code for prices and order totals
        locale: Babel locale used for display formatting
        order_number_prefix: prefix of human-readable order numbers
        strict_status_transitions: refuse status changes outside the allow-list
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_", env_file=".env", extra="ignore"
    )

    data_dir: Path = Field(default=_DEFAULT_DATA_DIR)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    slug_max_attempts: int = Field(default=50, ge=1)
    cart_max_quantity: int = Field(default=10, ge=1)

    tax_rate: Decimal = Field(default=Decimal("0.25"), ge=0)
    flat_shipping: Decimal = Field(default=Decimal("99"), ge=0)
    currency: str = Field(default="SEK", min_length=3, max_length=3)
    locale: str = Field(default="sv_SE")
    order_number_prefix: str = Field(default="WB")

    strict_status_transitions: bool = Field(default=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
