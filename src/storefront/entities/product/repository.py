"""Product repository for database operations."""

from sqlmodel import Session, func, select

from src.storefront.entities._base import utc_now
from src.storefront.entities.product.entity import Product
from src.storefront.entities.product.filters import (
    ProductListQuery,
    build_product_filter,
    build_product_order,
)
from src.storefront.entities.product.table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(product, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product_id: str, changes: dict) -> Product:
        """Apply ``changes`` to a stored product.

        Raises:
            ValueError: If the product does not exist
        """
        row = self._session.get(ProductTable, product_id)
        if row is None:
            raise ValueError(f"Product {product_id} not found")

        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = utc_now()

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: str) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.created_at.desc())
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def list_filtered(self, query: ProductListQuery) -> tuple[list[Product], int]:
        """Return one page of products matching ``query`` and the total match count."""
        where = build_product_filter(query)

        statement = (
            select(ProductTable)
            .where(where)
            .order_by(build_product_order(query), ProductTable.id)
            .offset(query.skip)
            .limit(query.limit)
        )
        rows = self._session.exec(statement).all()

        total = self._session.exec(
            select(func.count()).select_from(ProductTable).where(where)
        ).one()

        products = [Product.model_validate(row, from_attributes=True) for row in rows]
        return products, total
