"""Store settings API package."""

from shopfront.settings.api.routes import settings_router

__all__ = ["settings_router"]
