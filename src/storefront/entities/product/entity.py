"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.storefront.entities._base import ApiModel, Entity


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated form/query value, dropping empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class Product(Entity):
    """Catalog item with variant attributes and inventory/rating counters.

    This is the domain model that contains business logic and validation.
    It inherits from Entity to get auto-generated UUID identifiers.
    """

    name: str = Field(description="Display name")
    brand: str = Field(description="Brand name")
    description: str = Field(default="", description="Long description")
    category: str = Field(description="Catalog category")
    gender: str = Field(default="", description="Target gender")
    sizes: list[str] = Field(default_factory=list, description="Available sizes")
    colors: list[str] = Field(default_factory=list, description="Available colors")
    price: float = Field(ge=0, description="Unit price")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    images: list[str] = Field(default_factory=list, description="Image URLs")
    sold_count: int = Field(default=0, ge=0, description="Units sold")
    rating: float = Field(default=0, ge=0, description="Average rating")

    def __eq__(self, other: Any) -> bool:
        """Compare products by identity, ignoring timestamps."""
        if not isinstance(other, Product):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class ProductDraft(ApiModel):
    """Fields accepted when creating a product, before images are attached."""

    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    description: str = ""
    category: str = Field(min_length=1)
    gender: str = ""
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    price: float = Field(ge=0)
    stock: int = Field(ge=0)

    def to_product(self, images: list[str]) -> Product:
        return Product(**self.model_dump(), images=images, sold_count=0, rating=0)


class ProductUpdate(ApiModel):
    """Partial update; fields left as None keep their stored value."""

    name: str | None = Field(default=None, min_length=1)
    brand: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1)
    gender: str | None = None
    sizes: list[str] | None = None
    colors: list[str] | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
