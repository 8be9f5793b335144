from typing import Optional

from fastapi import APIRouter

from app.models.coupon import (
    CouponApplicationResult,
    CouponBatchRequest,
    CouponCheckRequest,
    CouponDiscountResult,
    CouponValidationResult,
)
from app.services.coupon_service import coupon_service

router = APIRouter(prefix="/coupons", tags=["优惠券计算"])


@router.post("/validate", response_model=CouponValidationResult)
async def validate_coupon(body: CouponCheckRequest):
    """校验单张优惠券"""
    return coupon_service.validate_coupon(body.coupon, body.order_context)


@router.post("/calculate", response_model=Optional[CouponDiscountResult])
async def calculate_discount(body: CouponCheckRequest):
    """计算单张优惠券折扣，不可用时返回null"""
    return coupon_service.calculate_discount(body.coupon, body.order_context)


@router.post("/apply", response_model=CouponApplicationResult)
async def apply_coupons(body: CouponBatchRequest):
    """按顺序依次应用多张优惠券"""
    return coupon_service.apply_coupons(body.coupons, body.order_context)
