"""Store settings — the single record holding shipping and gateway options.

Checkout never reads this aggregate directly. ``load_checkout_config``
snapshots it into an immutable ``CheckoutConfig`` that the order workflow
receives as an argument, so one placement sees one consistent set of
rates even if an admin edits the settings mid-request.
"""

import os
from dataclasses import dataclass
from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront

DEFAULT_FLAT_SHIPPING_RATE = 50.0
DEFAULT_FREE_SHIPPING_THRESHOLD = 999.0

# The store has exactly one settings record, always stored under this id
STORE_SETTINGS_ID = "store-settings"


@shopfront.aggregate
class StoreSettings:
    flat_shipping_rate: Float(default=DEFAULT_FLAT_SHIPPING_RATE, min_value=0.0)
    free_shipping_threshold: Float(default=DEFAULT_FREE_SHIPPING_THRESHOLD, min_value=0.0)
    cod_enabled: Boolean(default=True)
    razorpay_key_id: String(max_length=100)
    razorpay_key_secret: String(max_length=255)
    updated_at: DateTime()

    def update(self, **changes):
        for name, value in changes.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(UTC)

    def to_public_dict(self) -> dict:
        return {
            "flat_shipping_rate": self.flat_shipping_rate,
            "free_shipping_threshold": self.free_shipping_threshold,
            "cod_enabled": self.cod_enabled,
            "razorpay_key_id": self.razorpay_key_id,
            "razorpay_key_secret_set": bool(self.razorpay_key_secret),
        }


@dataclass(frozen=True)
class CheckoutConfig:
    """Settings snapshot handed to the order workflow."""

    flat_shipping_rate: float = DEFAULT_FLAT_SHIPPING_RATE
    free_shipping_threshold: float = DEFAULT_FREE_SHIPPING_THRESHOLD
    cod_enabled: bool = True

    def delivery_charge_for(self, subtotal: float) -> float:
        if subtotal >= self.free_shipping_threshold:
            return 0.0
        return self.flat_shipping_rate


@dataclass(frozen=True)
class GatewayCredentials:
    key_id: str | None
    key_secret: str | None


def current_settings() -> StoreSettings:
    """Return the settings record, creating it with defaults on first use.

    Two first uses racing each other both write under ``STORE_SETTINGS_ID``,
    so storage still ends up with a single record.
    """
    repo = current_domain.repository_for(StoreSettings)
    settings = repo.get_or_none(STORE_SETTINGS_ID)
    if settings is not None:
        return settings

    settings = StoreSettings(id=STORE_SETTINGS_ID, updated_at=datetime.now(UTC))
    repo.add(settings)
    return settings


def load_checkout_config() -> CheckoutConfig:
    settings = current_settings()
    return CheckoutConfig(
        flat_shipping_rate=settings.flat_shipping_rate,
        free_shipping_threshold=settings.free_shipping_threshold,
        cod_enabled=settings.cod_enabled,
    )


def load_gateway_credentials() -> GatewayCredentials:
    """Gateway keys from the settings record, falling back to the environment."""
    settings = current_settings()
    return GatewayCredentials(
        key_id=settings.razorpay_key_id or os.getenv("RAZORPAY_KEY_ID"),
        key_secret=settings.razorpay_key_secret or os.getenv("RAZORPAY_KEY_SECRET"),
    )
