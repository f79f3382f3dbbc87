"""Category aggregate — a named shelf that products are filed under."""

import re
from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from shopfront.domain import shopfront


def slugify(name: str) -> str:
    """Lowercase the name and collapse every run of other characters to a hyphen."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@shopfront.aggregate
class Category:
    """Products point at a category by id. Names are unique across the catalog,
    and the slug follows the name unless one is given explicitly.
    """

    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description=None, slug=None, image_url=None):
        from shopfront.catalogue.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            slug=slug or slugify(name),
            description=description,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryCreated(category_id=category.id, name=name, slug=category.slug))
        return category

    def update_details(self, name=None, description=None, slug=None, image_url=None):
        if name is not None:
            self.name = name
            if slug is None:
                self.slug = slugify(name)
        if slug is not None:
            self.slug = slug
        if description is not None:
            self.description = description
        if image_url is not None:
            # An empty string clears the image
            self.image_url = image_url or None
        self.updated_at = datetime.now(UTC)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
