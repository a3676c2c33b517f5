"""Product entity model."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Catalog product. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Opaque product identifier")
    title: str = Field("", description="Product title")
    description: str = Field("", description="Product description")
    image: str = Field("", description="Image reference relative to the CDN")
    category: str = Field("", description="Category tag")
    price: Optional[float] = Field(None, ge=0, description="Price, None when unpriced")

    @property
    def is_priced(self) -> bool:
        """Unpriced products cannot be bought and count as 0 in totals."""
        return self.price is not None
