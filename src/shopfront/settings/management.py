"""Settings management — partial update command and handler."""

from protean import handle
from protean.fields import Boolean, Float, String
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.settings.store import StoreSettings, current_settings


@shopfront.command(part_of="StoreSettings")
class UpdateStoreSettings:
    flat_shipping_rate: Float(min_value=0.0)
    free_shipping_threshold: Float(min_value=0.0)
    cod_enabled: Boolean()
    razorpay_key_id: String(max_length=100)
    razorpay_key_secret: String(max_length=255)


@shopfront.command_handler(part_of=StoreSettings)
class StoreSettingsHandler:
    @handle(UpdateStoreSettings)
    def update_settings(self, command):
        settings = current_settings()
        settings.update(
            flat_shipping_rate=command.flat_shipping_rate,
            free_shipping_threshold=command.free_shipping_threshold,
            cod_enabled=command.cod_enabled,
            razorpay_key_id=command.razorpay_key_id,
            razorpay_key_secret=command.razorpay_key_secret,
        )
        current_domain.repository_for(StoreSettings).add(settings)
        return settings.to_public_dict()
