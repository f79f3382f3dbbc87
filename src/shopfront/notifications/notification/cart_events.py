"""Notifications reacts to Cart events."""

from protean.utils.mixins import handle

from shopfront.domain import shopfront
from shopfront.notifications.notification.dispatcher import notify
from shopfront.notifications.notification.notification import Notification, NotificationType
from shopfront.ordering.cart.events import CartItemAdded


@shopfront.event_handler(part_of=Notification, stream_category="shopfront::cart")
class CartNotificationsHandler:
    @handle(CartItemAdded)
    def on_item_added(self, event: CartItemAdded) -> None:
        notify(
            recipient_id=str(event.user_id),
            notification_type=NotificationType.USER.value,
            title="Added to Cart",
            message=f"Your cart now holds {event.quantity} of this item.",
            link="/cart",
        )
