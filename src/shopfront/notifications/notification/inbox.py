"""Inbox management — reading and deleting notifications."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shopfront.domain import shopfront
from shopfront.errors import NotFoundError
from shopfront.notifications.notification.notification import Notification


@shopfront.command(part_of="Notification")
class MarkNotificationRead:
    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)


@shopfront.command(part_of="Notification")
class MarkAllNotificationsRead:
    recipient_id: Identifier(required=True)


@shopfront.command(part_of="Notification")
class DeleteNotification:
    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)


def inbox_of(recipient_id: str, unread_only: bool = False) -> list[Notification]:
    query = current_domain.repository_for(Notification)._dao.query.filter(recipient_id=recipient_id)
    if unread_only:
        query = query.filter(is_read=False)
    return query.order_by("-created_at").all().items


def _load(notification_id: str, recipient_id: str) -> Notification:
    try:
        notification = current_domain.repository_for(Notification).get(notification_id)
    except ObjectNotFoundError:
        notification = None
    if notification is None or notification.recipient_id != recipient_id:
        raise NotFoundError(f"Notification {notification_id} not found", notification_id=notification_id)
    return notification


@shopfront.command_handler(part_of=Notification)
class InboxHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        notification = _load(command.notification_id, command.recipient_id)
        notification.mark_read()
        current_domain.repository_for(Notification).add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = inbox_of(command.recipient_id, unread_only=True)
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)

    @handle(DeleteNotification)
    def delete(self, command):
        notification = _load(command.notification_id, command.recipient_id)
        current_domain.repository_for(Notification)._dao.delete(notification)
