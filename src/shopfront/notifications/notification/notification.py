"""Notification aggregate — an in-app message in a user's or the admins' inbox."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from shopfront.domain import shopfront

ADMIN_RECIPIENT = "admin"


class NotificationType(Enum):
    ORDER = "order"
    PAYMENT = "payment"
    STOCK = "stock"
    USER = "user"
    SYSTEM = "system"


@shopfront.aggregate
class Notification:
    recipient_id: Identifier(required=True)  # a user id, or "admin"
    type: String(choices=NotificationType, default=NotificationType.SYSTEM.value)
    title: String(required=True, max_length=200)
    message: Text(required=True)
    link: String(max_length=500)
    is_read: Boolean(default=False)
    created_at: DateTime()
    read_at: DateTime()

    @classmethod
    def create(cls, recipient_id, notification_type, title, message, link=None):
        return cls(
            recipient_id=recipient_id,
            type=notification_type,
            title=title,
            message=message,
            link=link,
            created_at=datetime.now(UTC),
        )

    def mark_read(self):
        if self.is_read:
            return
        self.is_read = True
        self.read_at = datetime.now(UTC)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "recipient_id": str(self.recipient_id),
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "link": self.link,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
