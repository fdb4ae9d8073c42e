from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints, model_validator

from ..models import slugify

StoreName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
StoreSlug = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=50)]


class StoreCreate(BaseModel):
    """Schema for creating a store. The slug is derived from the name when omitted."""

    name: StoreName = Field(..., examples=["Downtown Market"])
    slug: Optional[StoreSlug] = Field(None, examples=["downtown-market"])

    @model_validator(mode="after")
    def derive_slug(self):
        if not self.slug:
            self.slug = slugify(self.name) or None
        return self


class StoreUpdate(BaseModel):
    """Schema for a partial store update; only provided fields change."""

    name: Optional[StoreName] = None
    slug: Optional[StoreSlug] = None
