"""HTTP client for the coupon API, used by the admin console."""

from datetime import datetime

import httpx
from loguru import logger

from src.storefront.cli.settings import AdminCliSettings
from src.storefront.entities.coupon import Coupon, CouponCreate


class CouponApiError(Exception):
    """Raised when the coupon API answers with an error."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class CouponStore:
    """Coupon list state plus the API calls that refresh and modify it."""

    def __init__(
        self,
        settings: AdminCliSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        cookies = {}
        if settings.access_token:
            cookies[settings.cookie_name] = settings.access_token
        self._client = httpx.Client(
            base_url=settings.api_url.rstrip("/"),
            cookies=cookies,
            timeout=settings.timeout_seconds,
            transport=transport,
        )
        self.coupon_list: list[Coupon] = []

    def __enter__(self) -> "CouponStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_error:
            raise CouponApiError(response.status_code, _error_message(response))

    def fetch_all_coupons(self) -> list[Coupon]:
        response = self._client.get("/api/coupon")
        self._raise_for_status(response)
        self.coupon_list = [
            Coupon.model_validate(item) for item in response.json()["couponList"]
        ]
        return self.coupon_list

    def delete_coupon(self, coupon_id: str) -> bool:
        """Delete a coupon; returns whether the API confirmed the deletion."""
        try:
            response = self._client.delete(f"/api/coupon/{coupon_id}")
        except httpx.HTTPError as e:
            logger.warning("Coupon delete request failed: {}", e)
            return False
        if response.is_error:
            logger.warning(
                "Coupon delete rejected ({}): {}",
                response.status_code,
                _error_message(response),
            )
            return False
        return bool(response.json().get("success"))

    def create_coupon(
        self,
        code: str,
        discount_percent: float,
        usage_limit: int,
        start_date: datetime,
        end_date: datetime,
    ) -> Coupon:
        payload = CouponCreate(
            code=code,
            discount_percent=discount_percent,
            usage_limit=usage_limit,
            start_date=start_date,
            end_date=end_date,
        )
        response = self._client.post(
            "/api/coupon", json=payload.model_dump(mode="json", by_alias=True)
        )
        self._raise_for_status(response)
        return Coupon.model_validate(response.json()["coupon"])
