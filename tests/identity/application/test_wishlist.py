"""Application tests for the wishlist toggle."""

import pytest
from protean import current_domain
from shopfront.errors import ProductNotFound
from shopfront.identity.wishlist.wishlist import ToggleWishlist, like_count, wishlist_of


def _toggle(user_id, product_id):
    return current_domain.process(ToggleWishlist(user_id=user_id, product_id=product_id), asynchronous=False)


class TestWishlist:
    def test_toggle_likes_then_unlikes(self, make_product):
        product = make_product()

        assert _toggle("user-1", product.id) == {"liked": True}
        assert like_count(product.id) == 1

        assert _toggle("user-1", product.id) == {"liked": False}
        assert like_count(product.id) == 0

    def test_count_spans_users(self, make_product):
        product = make_product()
        _toggle("user-1", product.id)
        _toggle("user-2", product.id)
        assert like_count(product.id) == 2
        assert [str(e.product_id) for e in wishlist_of("user-1")] == [str(product.id)]

    def test_unknown_product(self):
        with pytest.raises(ProductNotFound):
            _toggle("user-1", "missing")
