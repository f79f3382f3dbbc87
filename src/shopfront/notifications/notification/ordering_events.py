"""Notifications reacts to Order events.

Customers hear about every step of their order; admins hear about new
orders, cancellations, return requests and payments.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from shopfront.domain import shopfront
from shopfront.notifications.notification.dispatcher import notify
from shopfront.notifications.notification.notification import ADMIN_RECIPIENT, Notification, NotificationType
from shopfront.ordering.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentConfirmed,
    PaymentFailed,
    ReturnRequested,
)
from shopfront.ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _short(order_id) -> str:
    return str(order_id)[-8:].upper()


def _link(order_id) -> str:
    return f"/orders/{order_id}"


def _contact_email(order_id) -> str | None:
    try:
        return current_domain.repository_for(Order).get(str(order_id)).contact_email
    except ObjectNotFoundError:
        logger.warning("Order missing for notification", order_id=str(order_id))
        return None


@shopfront.event_handler(part_of=Notification, stream_category="shopfront::order")
class OrderNotificationsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        ref = _short(event.order_id)
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.ORDER.value,
            title="Order Placed",
            message=f"Your order #{ref} for {event.total:.2f} has been placed.",
            link=_link(event.order_id),
            email=event.contact_email,
        )
        notify(
            recipient_id=ADMIN_RECIPIENT,
            notification_type=NotificationType.ORDER.value,
            title="New Order",
            message=f"Order #{ref} was placed for {event.total:.2f} ({event.item_count} items).",
            link=_link(event.order_id),
        )

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        status = event.new_status.replace("-", " ")
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.ORDER.value,
            title=f"Order {status.title()}",
            message=f"Your order #{_short(event.order_id)} is now {status}.",
            link=_link(event.order_id),
            email=_contact_email(event.order_id),
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        ref = _short(event.order_id)
        reason = f" Reason: {event.reason}" if event.reason else ""
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.ORDER.value,
            title="Order Cancelled",
            message=f"Your order #{ref} has been cancelled.{reason}",
            link=_link(event.order_id),
            email=_contact_email(event.order_id),
        )
        notify(
            recipient_id=ADMIN_RECIPIENT,
            notification_type=NotificationType.ORDER.value,
            title="Order Cancelled",
            message=f"Order #{ref} was cancelled by the {event.cancelled_by or 'customer'}.{reason}",
            link=_link(event.order_id),
        )

    @handle(ReturnRequested)
    def on_return_requested(self, event: ReturnRequested) -> None:
        ref = _short(event.order_id)
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.ORDER.value,
            title="Return Requested",
            message=f"We received your return request for order #{ref}.",
            link=_link(event.order_id),
        )
        notify(
            recipient_id=ADMIN_RECIPIENT,
            notification_type=NotificationType.ORDER.value,
            title="Return Requested",
            message=f"A return was requested for order #{ref}: {event.reason}",
            link=_link(event.order_id),
        )

    @handle(PaymentConfirmed)
    def on_payment_confirmed(self, event: PaymentConfirmed) -> None:
        ref = _short(event.order_id)
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.PAYMENT.value,
            title="Payment Received",
            message=f"We received {event.amount:.2f} for order #{ref}.",
            link=_link(event.order_id),
            email=_contact_email(event.order_id),
        )
        notify(
            recipient_id=ADMIN_RECIPIENT,
            notification_type=NotificationType.PAYMENT.value,
            title="Payment Received",
            message=f"Order #{ref} was paid ({event.amount:.2f}).",
            link=_link(event.order_id),
        )

    @handle(PaymentFailed)
    def on_payment_failed(self, event: PaymentFailed) -> None:
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.PAYMENT.value,
            title="Payment Failed",
            message=f"Payment for order #{_short(event.order_id)} did not go through.",
            link=_link(event.order_id),
        )
