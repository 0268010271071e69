"""Translation of storefront listing parameters into SQL predicates."""

import json
import math
from typing import Any, Literal

from pydantic import BaseModel, Field
from sqlalchemy import String, and_, cast, func, or_
from sqlalchemy.sql.elements import ColumnElement

from src.storefront.entities.product.table import ProductTable

SortField = Literal[
    "createdAt", "updatedAt", "price", "name", "rating", "soldCount", "stock"
]
SortOrder = Literal["asc", "desc"]

SORT_COLUMNS: dict[str, Any] = {
    "createdAt": ProductTable.created_at,
    "updatedAt": ProductTable.updated_at,
    "price": ProductTable.price,
    "name": ProductTable.name,
    "rating": ProductTable.rating,
    "soldCount": ProductTable.sold_count,
    "stock": ProductTable.stock,
}


class ProductListQuery(BaseModel):
    """Validated listing parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    categories: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    min_price: float = Field(default=0, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def json_array_has_any(column: Any, values: list[str]) -> ColumnElement[bool]:
    """Match rows whose JSON string array shares at least one element with values.

    Works on the serialized array text, so it behaves the same on SQLite and
    PostgreSQL without dialect-specific JSON operators.
    """
    as_text = cast(column, String)
    return or_(
        *(
            as_text.like(f"%{_escape_like(json.dumps(value))}%", escape="\\")
            for value in values
        )
    )


def _in_insensitive(column: Any, values: list[str]) -> ColumnElement[bool]:
    return func.lower(column).in_([value.lower() for value in values])


def build_product_filter(query: ProductListQuery) -> ColumnElement[bool]:
    """Build the conjunctive WHERE clause for a listing query."""
    conditions: list[ColumnElement[bool]] = []

    if query.categories:
        conditions.append(_in_insensitive(ProductTable.category, query.categories))
    if query.brands:
        conditions.append(_in_insensitive(ProductTable.brand, query.brands))
    if query.sizes:
        conditions.append(json_array_has_any(ProductTable.sizes, query.sizes))
    if query.colors:
        conditions.append(json_array_has_any(ProductTable.colors, query.colors))

    conditions.append(ProductTable.price >= query.min_price)
    if query.max_price is not None:
        conditions.append(ProductTable.price <= query.max_price)

    return and_(*conditions)


def build_product_order(query: ProductListQuery) -> Any:
    column = SORT_COLUMNS[query.sort_by]
    return column.asc() if query.sort_order == "asc" else column.desc()
