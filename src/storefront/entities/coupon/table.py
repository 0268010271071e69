"""Coupon database table model."""

from datetime import datetime

from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class CouponTable(EntityTable, table=True):
    """Database persistence model for coupons."""

    __tablename__ = "coupons"

    code: str = Field(unique=True, index=True, max_length=64)
    discount_percent: float
    usage_count: int = 0
    usage_limit: int
    start_date: datetime
    end_date: datetime
