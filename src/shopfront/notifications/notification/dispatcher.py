"""Notification dispatcher — fans one occurrence out to inbox records and email.

Delivery is best effort. Whatever fails here is logged and dropped so that
the workflow that triggered the notification is never affected.
"""

import html

import structlog
from protean.utils.globals import current_domain

from shopfront.notifications.channel import EmailDeliveryError, OutgoingEmail, get_email_channel
from shopfront.notifications.notification.notification import Notification

logger = structlog.get_logger(__name__)


def notify(recipient_id, notification_type, title, message, link=None, email=None) -> str | None:
    """Create an inbox notification and, when ``email`` is given, send it by mail.

    Returns the notification id, or None when the record could not be saved.
    """
    notification_id = None
    try:
        notification = Notification.create(
            recipient_id=recipient_id,
            notification_type=notification_type,
            title=title,
            message=message,
            link=link,
        )
        current_domain.repository_for(Notification).add(notification)
        notification_id = str(notification.id)
    except Exception:
        logger.exception("Notification not recorded", recipient_id=recipient_id, title=title)

    if email:
        send_email(email, title, message)

    return notification_id


def send_email(to: str, subject: str, body: str) -> bool:
    email = OutgoingEmail(to=to, subject=subject, text=body, html=f"<p>{html.escape(body)}</p>")
    try:
        message_id = get_email_channel().deliver(email)
    except EmailDeliveryError as exc:
        logger.warning("Email not delivered", to=to, subject=subject, error=str(exc))
        return False
    except Exception:
        logger.exception("Email dispatch raised", to=to, subject=subject)
        return False

    logger.debug("Email sent", to=to, subject=subject, message_id=message_id)
    return True
