"""Product database table model."""

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    Size, color and image lists are stored as JSON arrays so the same schema
    works on SQLite and PostgreSQL.
    """

    __tablename__ = "products"

    name: str = Field(index=True)
    brand: str = Field(index=True)
    description: str = ""
    category: str = Field(index=True)
    gender: str = ""
    sizes: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    colors: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    price: float = Field(index=True)
    stock: int = 0
    images: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    sold_count: int = 0
    rating: float = 0
