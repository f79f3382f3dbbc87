"""Notifications API package."""

from shopfront.notifications.api.routes import notification_router

__all__ = ["notification_router"]
