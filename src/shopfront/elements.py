"""Every module that registers a domain element.

``Domain.init()`` only walks the domain folder and its direct children,
while aggregates live one level deeper (``catalogue/product/...``). Importing
this module first puts every aggregate, command, handler, event and custom
repository on the registry, so ``repository_for`` hands back the classes
defined here rather than generic ones.
"""

import shopfront.catalogue.category.category  # noqa: F401
import shopfront.catalogue.category.events  # noqa: F401
import shopfront.catalogue.category.management  # noqa: F401
import shopfront.catalogue.category.repository  # noqa: F401
import shopfront.catalogue.product.creation  # noqa: F401
import shopfront.catalogue.product.details  # noqa: F401
import shopfront.catalogue.product.events  # noqa: F401
import shopfront.catalogue.product.product  # noqa: F401
import shopfront.catalogue.product.repository  # noqa: F401
import shopfront.identity.address.address  # noqa: F401
import shopfront.identity.address.management  # noqa: F401
import shopfront.identity.wishlist.wishlist  # noqa: F401
import shopfront.notifications.notification.cart_events  # noqa: F401
import shopfront.notifications.notification.inbox  # noqa: F401
import shopfront.notifications.notification.notification  # noqa: F401
import shopfront.notifications.notification.ordering_events  # noqa: F401
import shopfront.ordering.cart.cart  # noqa: F401
import shopfront.ordering.cart.events  # noqa: F401
import shopfront.ordering.cart.items  # noqa: F401
import shopfront.ordering.cart.repository  # noqa: F401
import shopfront.ordering.checkout.placement  # noqa: F401
import shopfront.ordering.coupon.coupon  # noqa: F401
import shopfront.ordering.coupon.management  # noqa: F401
import shopfront.ordering.coupon.repository  # noqa: F401
import shopfront.ordering.order.cancellation  # noqa: F401
import shopfront.ordering.order.events  # noqa: F401
import shopfront.ordering.order.fulfillment  # noqa: F401
import shopfront.ordering.order.order  # noqa: F401
import shopfront.ordering.order.repository  # noqa: F401
import shopfront.ordering.order.returns  # noqa: F401
import shopfront.payments.payment.reconciliation  # noqa: F401
import shopfront.payments.payment.status  # noqa: F401
import shopfront.reviews.review.editing  # noqa: F401
import shopfront.reviews.review.moderation  # noqa: F401
import shopfront.reviews.review.review  # noqa: F401
import shopfront.reviews.review.submission  # noqa: F401
import shopfront.settings.management  # noqa: F401
import shopfront.settings.store  # noqa: F401
