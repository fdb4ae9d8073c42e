import re
import uuid
from typing import Any, Dict, Optional

from sqlalchemy import Index, text
from sqlmodel import Field

from .base import SoftDeleteMixin, TimestampMixin, to_iso

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    return _NON_SLUG_CHARS.sub("-", value.strip().lower()).strip("-")


class Store(TimestampMixin, SoftDeleteMixin, table=True):
    # Slugs only have to be unique among live stores
    __table_args__ = (
        Index(
            "ux_store_slug_live",
            "slug",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: Optional[str] = Field(default=None)

    def to_json(self) -> Dict[str, Any]:
        return {
            "_id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
            "deletedAt": to_iso(self.deleted_at),
        }
