"""FastAPI routes for the notification inbox.

Customers work on their own inbox. Admins additionally reach the shared
admin inbox by passing ``admin=true``.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from shopfront.api.auth import Principal, current_principal, require_admin
from shopfront.errors import ForbiddenError
from shopfront.notifications.notification.inbox import (
    DeleteNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
    inbox_of,
)
from shopfront.notifications.notification.notification import ADMIN_RECIPIENT

notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


def _recipient(principal: Principal, admin: bool) -> str:
    if not admin:
        return principal.user_id
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return ADMIN_RECIPIENT


@notification_router.get("")
async def my_notifications(unread_only: bool = False, principal: Principal = Depends(current_principal)) -> list[dict]:
    return [n.to_dict() for n in inbox_of(principal.user_id, unread_only=unread_only)]


@notification_router.get("/admin")
async def admin_notifications(unread_only: bool = False, principal: Principal = Depends(require_admin)) -> list[dict]:
    return [n.to_dict() for n in inbox_of(ADMIN_RECIPIENT, unread_only=unread_only)]


@notification_router.put("/read-all")
async def mark_all_read(admin: bool = False, principal: Principal = Depends(current_principal)) -> dict:
    command = MarkAllNotificationsRead(recipient_id=_recipient(principal, admin))
    count = current_domain.process(command, asynchronous=False)
    return {"status": "ok", "marked": count}


@notification_router.put("/{notification_id}/read")
async def mark_read(notification_id: str, admin: bool = False, principal: Principal = Depends(current_principal)) -> dict:
    command = MarkNotificationRead(notification_id=notification_id, recipient_id=_recipient(principal, admin))
    current_domain.process(command, asynchronous=False)
    return {"status": "ok"}


@notification_router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str, admin: bool = False, principal: Principal = Depends(current_principal)
) -> dict:
    command = DeleteNotification(notification_id=notification_id, recipient_id=_recipient(principal, admin))
    current_domain.process(command, asynchronous=False)
    return {"status": "deleted"}
