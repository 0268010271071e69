"""Coupon repository for database operations."""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.storefront.entities.coupon.entity import Coupon
from src.storefront.entities.coupon.table import CouponTable


class DuplicateCouponCodeError(ValueError):
    """Raised when a coupon code is already taken."""


class CouponRepository:
    """Data-access layer for coupons."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, coupon_id: str) -> Coupon | None:
        row = self._session.get(CouponTable, coupon_id)
        if row is None:
            return None
        return Coupon.model_validate(row, from_attributes=True)

    def get_by_code(self, code: str) -> Coupon | None:
        statement = select(CouponTable).where(CouponTable.code == code)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Coupon.model_validate(row, from_attributes=True)

    def create(self, coupon: Coupon) -> Coupon:
        if self.get_by_code(coupon.code) is not None:
            raise DuplicateCouponCodeError(f"Coupon code {coupon.code!r} already exists")

        row = CouponTable.model_validate(coupon, from_attributes=True)
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateCouponCodeError(
                f"Coupon code {coupon.code!r} already exists"
            ) from e
        self._session.refresh(row)
        return Coupon.model_validate(row, from_attributes=True)

    def delete(self, coupon_id: str) -> bool:
        row = self._session.get(CouponTable, coupon_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_all(self) -> list[Coupon]:
        statement = select(CouponTable).order_by(CouponTable.created_at.desc())
        rows = self._session.exec(statement).all()
        return [Coupon.model_validate(row, from_attributes=True) for row in rows]
