"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .coupon import Coupon, CouponRepository, CouponTable
from .product import Product, ProductRepository, ProductTable

__all__ = [
    "Coupon",
    "CouponRepository",
    "CouponTable",
    "Product",
    "ProductRepository",
    "ProductTable",
]
