"""
服务包初始化文件
"""

from .coupon_strategies import (
    CouponStrategy,
    FixedAmountStrategy,
    PercentageStrategy,
    FreeShippingStrategy,
    get_strategy,
)
from .coupon_service import CouponService, coupon_service
from .order_calculation_service import OrderCalculationService, order_calculation_service

__all__ = [
    "CouponStrategy",
    "FixedAmountStrategy",
    "PercentageStrategy",
    "FreeShippingStrategy",
    "get_strategy",
    "CouponService",
    "coupon_service",
    "OrderCalculationService",
    "order_calculation_service",
]
