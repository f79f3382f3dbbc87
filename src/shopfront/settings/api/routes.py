"""FastAPI routes for store settings."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain
from pydantic import BaseModel, Field

from shopfront.api.auth import Principal, require_admin
from shopfront.settings.management import UpdateStoreSettings
from shopfront.settings.store import current_settings

settings_router = APIRouter(prefix="/settings", tags=["settings"])


class UpdateSettingsRequest(BaseModel):
    flat_shipping_rate: float | None = Field(None, ge=0)
    free_shipping_threshold: float | None = Field(None, ge=0)
    cod_enabled: bool | None = None
    razorpay_key_id: str | None = Field(None, max_length=100)
    razorpay_key_secret: str | None = Field(None, max_length=255)


@settings_router.get("")
async def get_settings() -> dict:
    return current_settings().to_public_dict()


@settings_router.put("")
async def update_settings(body: UpdateSettingsRequest, principal: Principal = Depends(require_admin)) -> dict:
    command = UpdateStoreSettings(**body.model_dump(exclude_none=True))
    return current_domain.process(command, asynchronous=False)
