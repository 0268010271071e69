from datetime import UTC, datetime, timedelta

from src.storefront.entities.coupon import Coupon
from src.storefront.entities.product import Product


def make_product(**overrides) -> Product:
    values = {
        "name": "Classic Tee",
        "brand": "Acme",
        "description": "Cotton t-shirt",
        "category": "Shirts",
        "gender": "unisex",
        "sizes": ["S", "M", "L"],
        "colors": ["Black", "White"],
        "price": 20.0,
        "stock": 10,
        "images": ["https://res.cloudinary.com/demo-cloud/tee.png"],
    }
    values.update(overrides)
    return Product(**values)


def make_coupon(**overrides) -> Coupon:
    now = datetime.now(UTC)
    values = {
        "code": "SAVE10",
        "discount_percent": 10,
        "usage_limit": 100,
        "start_date": now - timedelta(days=1),
        "end_date": now + timedelta(days=30),
    }
    values.update(overrides)
    return Coupon(**values)
