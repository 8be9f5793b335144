import logging
from datetime import datetime

from fastapi import APIRouter

from app.models.order import CouponRecommendationRequest, OrderCalculationPayload
from app.services.order_calculation_service import order_calculation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["订单计算"])


def success_response(data, message: str) -> dict:
    return {
        "success": True,
        "data": data,
        "message": message,
        "timestamp": datetime.now().isoformat(),
    }


@router.post("/calculate")
async def calculate_order(body: OrderCalculationPayload):
    """计算订单总价"""
    result = order_calculation_service.calculate_order(body.request, body.coupons)
    return success_response(result.model_dump(mode="json", by_alias=True), "订单计算成功")


@router.post("/recommend-coupons")
async def recommend_coupons(body: CouponRecommendationRequest):
    """获取优惠券推荐"""
    coupon_ids = order_calculation_service.recommend_coupons(
        user_id=body.user_id,
        order_items=body.order_items,
        subtotal=body.subtotal,
        coupons=body.coupons
    )
    logger.debug(f"用户 {body.user_id} 推荐优惠券: {coupon_ids}")
    return success_response({"recommendedCouponIds": coupon_ids}, "获取优惠券推荐成功")
