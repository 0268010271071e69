"""Unit tests for the coupon entity and repository."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from src.storefront.entities.coupon import (
    CouponCreate,
    CouponRepository,
    CouponStatus,
    DuplicateCouponCodeError,
)
from tests.utils import make_coupon


class TestCouponStatus:
    def test_active_before_end_date(self):
        coupon = make_coupon()
        assert coupon.status is CouponStatus.ACTIVE

    def test_expired_after_end_date(self):
        now = datetime.now(UTC)
        coupon = make_coupon(
            start_date=now - timedelta(days=10), end_date=now - timedelta(days=1)
        )
        assert coupon.status is CouponStatus.EXPIRED

    def test_end_date_equal_to_now_is_expired(self):
        moment = datetime(2025, 6, 1, tzinfo=UTC)
        coupon = make_coupon(start_date=moment - timedelta(days=1), end_date=moment)
        assert coupon.status_at(moment) is CouponStatus.EXPIRED

    def test_naive_dates_are_treated_as_utc(self):
        coupon = make_coupon(
            start_date=datetime(2025, 1, 1), end_date=datetime(2025, 2, 1)
        )
        assert coupon.status_at(datetime(2025, 1, 15, tzinfo=UTC)) is CouponStatus.ACTIVE

    def test_status_is_serialized(self):
        data = make_coupon().model_dump(by_alias=True, mode="json")
        assert data["status"] == "Active"
        assert data["discountPercent"] == 10
        assert data["usageCount"] == 0


class TestCouponCreate:
    def _payload(self, **overrides):
        payload = {
            "code": "  WELCOME  ",
            "discountPercent": 15,
            "usageLimit": 10,
            "startDate": "2025-01-01T00:00:00Z",
            "endDate": "2025-12-31T00:00:00Z",
        }
        payload.update(overrides)
        return payload

    def test_accepts_camel_case_and_strips_code(self):
        create = CouponCreate.model_validate(self._payload())
        assert create.code == "WELCOME"

        coupon = create.to_coupon()
        assert coupon.usage_count == 0
        assert coupon.discount_percent == 15

    def test_rejects_end_before_start(self):
        with pytest.raises(ValidationError, match="endDate must be after startDate"):
            CouponCreate.model_validate(self._payload(endDate="2024-12-31T00:00:00Z"))

    @pytest.mark.parametrize("discount", [0, -5, 101])
    def test_rejects_out_of_range_discount(self, discount):
        with pytest.raises(ValidationError):
            CouponCreate.model_validate(self._payload(discountPercent=discount))

    def test_rejects_blank_code(self):
        with pytest.raises(ValidationError):
            CouponCreate.model_validate(self._payload(code="   "))


class TestCouponRepository:
    @pytest.fixture
    def repository(self, session) -> CouponRepository:
        return CouponRepository(session)

    def test_create_and_list(self, repository, session):
        created = repository.create(make_coupon(code="A"))
        repository.create(make_coupon(code="B"))
        session.commit()

        coupons = repository.list_all()

        assert {c.code for c in coupons} == {"A", "B"}
        assert repository.get(created.id).code == "A"
        assert repository.get_by_code("B") is not None

    def test_duplicate_code(self, repository, session):
        repository.create(make_coupon(code="DUP"))
        session.commit()

        with pytest.raises(DuplicateCouponCodeError):
            repository.create(make_coupon(code="DUP"))

    def test_delete(self, repository, session):
        created = repository.create(make_coupon())
        session.commit()

        assert repository.delete(created.id) is True
        session.commit()
        assert repository.get(created.id) is None
        assert repository.delete(created.id) is False

    def test_dates_survive_round_trip(self, repository, session):
        created = repository.create(make_coupon())
        session.commit()

        fetched = repository.get(created.id)

        assert fetched.status is CouponStatus.ACTIVE
