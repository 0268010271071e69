"""Entity package: Product."""

from .entity import Product, ProductDraft, ProductUpdate, split_csv
from .filters import ProductListQuery
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "Product",
    "ProductDraft",
    "ProductUpdate",
    "ProductListQuery",
    "ProductRepository",
    "ProductTable",
    "split_csv",
]
