"""Domain events for the Order aggregate.

These are what the notification dispatcher listens to: placement, status
changes, cancellation, return requests and payment outcomes.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from shopfront.domain import shopfront


@shopfront.event(part_of="Order")
class OrderPlaced:
    """Stock was reserved and the order persisted as pending."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_count: Integer(required=True)
    subtotal: Float(required=True)
    discount: Float()
    delivery_charge: Float()
    total: Float(required=True)
    payment_method: String()
    contact_email: String()
    placed_at: DateTime(required=True)


@shopfront.event(part_of="Order")
class OrderStatusChanged:
    """The order moved one step along the fulfilment path."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@shopfront.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled and its stock returned."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reason: String()
    cancelled_by: String()
    cancelled_at: DateTime(required=True)


@shopfront.event(part_of="Order")
class ReturnRequested:
    """The customer asked to return a delivered order."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reason: String()
    requested_at: DateTime(required=True)


@shopfront.event(part_of="Order")
class PaymentConfirmed:
    """The payment provider's confirmation was verified and applied."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    provider_payment_id: String()
    amount: Float(required=True)
    paid_at: DateTime(required=True)


@shopfront.event(part_of="Order")
class PaymentFailed:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    failed_at: DateTime(required=True)
