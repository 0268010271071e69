"""Coupon API router used by the admin console."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from src.storefront.api.http.deps import get_db_session, require_admin
from src.storefront.api.http.schemas import MessageResponse
from src.storefront.entities._base import ApiModel
from src.storefront.entities.coupon import (
    Coupon,
    CouponCreate,
    CouponRepository,
    DuplicateCouponCodeError,
)


router = APIRouter(
    prefix="/api/coupon",
    tags=["coupons"],
    dependencies=[Depends(require_admin)],
)


class CouponList(ApiModel):
    success: bool = True
    coupon_list: list[Coupon]


class CouponCreated(ApiModel):
    success: bool = True
    coupon: Coupon


@router.get("", response_model=CouponList)
def fetch_all_coupons(session: Session = Depends(get_db_session)) -> CouponList:
    """List all coupons, newest first."""
    return CouponList(coupon_list=CouponRepository(session).list_all())


@router.post("", response_model=CouponCreated, status_code=201)
def create_coupon(
    payload: CouponCreate,
    session: Session = Depends(get_db_session),
) -> CouponCreated:
    """Create a coupon."""
    repository = CouponRepository(session)
    try:
        coupon = repository.create(payload.to_coupon())
    except DuplicateCouponCodeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    session.commit()
    return CouponCreated(coupon=coupon)


@router.delete("/{coupon_id}", response_model=MessageResponse)
def delete_coupon(
    coupon_id: str,
    session: Session = Depends(get_db_session),
) -> MessageResponse:
    """Delete a coupon."""
    if not CouponRepository(session).delete(coupon_id):
        raise HTTPException(status_code=404, detail="Coupon not found!")
    session.commit()
    return MessageResponse(message="Coupon deleted successfully!")
