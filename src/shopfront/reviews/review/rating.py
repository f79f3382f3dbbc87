"""Product rating summary, recomputed from approved reviews.

Handlers call ``refresh_product_rating`` in the same unit of work that
changes a review. Storage may not show that change yet, so the caller
passes the changed review (or the id of the removed one) and it is folded
into what storage returns.
"""

from protean.utils.globals import current_domain

from shopfront.catalogue.product.product import Product
from shopfront.reviews.review.review import Review


def summarize(ratings: list[int]) -> tuple[float, int]:
    if not ratings:
        return 0.0, 0
    return round(sum(ratings) / len(ratings), 2), len(ratings)


def approved_reviews_of(product_id: str) -> list[Review]:
    repo = current_domain.repository_for(Review)
    return repo._dao.query.filter(product_id=product_id, is_approved=True).order_by("-created_at").all().items


def refresh_product_rating(product_id: str, changed: Review | None = None, removed_id: str | None = None):
    skip = {str(r.id) for r in (changed,) if r is not None}
    if removed_id:
        skip.add(str(removed_id))

    reviews = [r for r in approved_reviews_of(product_id) if str(r.id) not in skip]
    if changed is not None and changed.is_approved:
        reviews.append(changed)

    avg_rating, rating_count = summarize([r.rating for r in reviews])
    current_domain.repository_for(Product).record_rating(product_id, avg_rating, rating_count)
    return avg_rating, rating_count
