"""
数据模型包初始化文件
"""

from .coupon import (
    Coupon,
    CouponType,
    OrderItem,
    OrderContext,
    CouponValidationResult,
    CouponDiscountResult,
    CouponApplicationResult,
)
from .order import (
    OrderCalculationRequest,
    OrderCalculationResult,
    AppliedCouponDetail,
)

__all__ = [
    "Coupon",
    "CouponType",
    "OrderItem",
    "OrderContext",
    "CouponValidationResult",
    "CouponDiscountResult",
    "CouponApplicationResult",
    "OrderCalculationRequest",
    "OrderCalculationResult",
    "AppliedCouponDetail",
]
