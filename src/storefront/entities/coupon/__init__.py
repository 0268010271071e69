"""Entity package: Coupon."""

from .entity import Coupon, CouponCreate, CouponStatus
from .repository import CouponRepository, DuplicateCouponCodeError
from .table import CouponTable

__all__ = [
    "Coupon",
    "CouponCreate",
    "CouponStatus",
    "CouponRepository",
    "CouponTable",
    "DuplicateCouponCodeError",
]
