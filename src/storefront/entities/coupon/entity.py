"""Entity: Coupon."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import Field, computed_field, field_validator, model_validator

from src.storefront.entities._base import ApiModel, Entity, utc_now


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class CouponStatus(str, Enum):
    ACTIVE = "Active"
    EXPIRED = "Expired"


class Coupon(Entity):
    """Discount code with a usage cap and a validity window."""

    code: str = Field(description="Code entered at checkout")
    discount_percent: float = Field(gt=0, le=100, description="Discount in percent")
    usage_count: int = Field(default=0, ge=0, description="Times redeemed")
    usage_limit: int = Field(ge=1, description="Maximum redemptions")
    start_date: datetime = Field(description="Start of validity window")
    end_date: datetime = Field(description="End of validity window")

    def status_at(self, moment: datetime) -> CouponStatus:
        if _as_utc(self.end_date) > _as_utc(moment):
            return CouponStatus.ACTIVE
        return CouponStatus.EXPIRED

    @computed_field
    @property
    def status(self) -> CouponStatus:
        return self.status_at(utc_now())


class CouponCreate(ApiModel):
    """Payload accepted when creating a coupon."""

    code: str = Field(min_length=1, max_length=64)
    discount_percent: float = Field(gt=0, le=100)
    usage_limit: int = Field(ge=1)
    start_date: datetime
    end_date: datetime

    @field_validator("code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("code must not be blank")
        return value

    @model_validator(mode="after")
    def check_window(self) -> "CouponCreate":
        if _as_utc(self.end_date) <= _as_utc(self.start_date):
            raise ValueError("endDate must be after startDate")
        return self

    def to_coupon(self) -> Coupon:
        return Coupon(**self.model_dump(), usage_count=0)
