"""HTTP surface shared by every context: caller identity, error mapping and app wiring."""

from uuid import uuid4

from fastapi import FastAPI, Request

from shopfront.api.errors import register_error_handlers
from shopfront.domain import shopfront
from shopfront.utils.logging import add_context, clear_context


def routers() -> list:
    from shopfront.catalogue.api import category_router, product_router
    from shopfront.identity.api import address_router, wishlist_router
    from shopfront.notifications.api import notification_router
    from shopfront.ordering.api import cart_router, coupon_router, order_router
    from shopfront.payments.api import payment_router
    from shopfront.reviews.api import review_router
    from shopfront.settings.api import settings_router

    return [
        product_router,
        category_router,
        cart_router,
        order_router,
        coupon_router,
        payment_router,
        review_router,
        wishlist_router,
        address_router,
        notification_router,
        settings_router,
    ]


def configure_app(app: FastAPI) -> FastAPI:
    """Attach middleware, error handlers and every router to ``app``.

    The domain must be initialized before the first request is served.
    """

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with shopfront.domain_context():
            return await call_next(request)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response

    register_error_handlers(app)
    for router in routers():
        app.include_router(router)
    return app
