"""
优惠券计算策略
每种优惠券类型一个策略：资格校验规则相同，折扣计算各不相同
策略不抛异常、不写日志，校验失败通过结果对象返回
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.models.coupon import (
    Coupon,
    CouponType,
    CouponValidationResult,
    CouponDiscountResult,
    OrderContext,
)


# 校验失败提示
COUPON_INACTIVE = "优惠券已失效"
COUPON_OUT_OF_PERIOD = "优惠券不在有效期内"
COUPON_USAGE_LIMIT_REACHED = "优惠券使用次数已达上限"
COUPON_UNSUPPORTED_TYPE = "不支持的优惠券类型"


def min_amount_not_met(min_amount: Decimal) -> str:
    # 去掉多余的小数位：300.0 -> 300，99.50 -> 99.5
    return f"订单金额需满{min_amount.normalize():f}元"


class CouponStrategy(ABC):
    """优惠券策略基类"""

    def validate(
        self,
        coupon: Coupon,
        order_context: OrderContext,
        now: Optional[datetime] = None
    ) -> CouponValidationResult:
        """
        校验优惠券是否可用于当前订单

        依次检查：启用状态 -> 有效期 -> 使用次数 -> 最低订单金额，
        返回第一个不满足的条件
        """
        if not coupon.is_active:
            return CouponValidationResult(is_valid=False, error=COUPON_INACTIVE)

        if now is None:
            now = datetime.now(coupon.start_date.tzinfo)
        if now < coupon.start_date or now > coupon.end_date:
            return CouponValidationResult(is_valid=False, error=COUPON_OUT_OF_PERIOD)

        if coupon.usage_limit_reached():
            return CouponValidationResult(is_valid=False, error=COUPON_USAGE_LIMIT_REACHED)

        # min_amount为空或0视为无门槛
        if coupon.min_amount and order_context.subtotal < coupon.min_amount:
            return CouponValidationResult(
                is_valid=False,
                error=min_amount_not_met(coupon.min_amount)
            )

        return CouponValidationResult(is_valid=True)

    @abstractmethod
    def calculate_discount(
        self,
        coupon: Coupon,
        order_context: OrderContext
    ) -> CouponDiscountResult:
        """计算折扣，调用前需先通过validate"""


class FixedAmountStrategy(CouponStrategy):
    """固定金额券"""

    def calculate_discount(self, coupon: Coupon, order_context: OrderContext) -> CouponDiscountResult:
        # 折扣不能超过订单金额
        discount = min(coupon.value, order_context.subtotal)
        final_amount = max(Decimal("0"), order_context.subtotal - discount)

        return CouponDiscountResult(
            discount=discount,
            final_amount=final_amount,
            applied_coupon=coupon
        )


class PercentageStrategy(CouponStrategy):
    """百分比折扣券，value为0-100"""

    def calculate_discount(self, coupon: Coupon, order_context: OrderContext) -> CouponDiscountResult:
        discount = order_context.subtotal * coupon.value / 100

        if coupon.max_discount:
            discount = min(discount, coupon.max_discount)

        final_amount = max(Decimal("0"), order_context.subtotal - discount)

        return CouponDiscountResult(
            discount=discount,
            final_amount=final_amount,
            applied_coupon=coupon
        )


class FreeShippingStrategy(CouponStrategy):
    """免运费券"""

    def calculate_discount(self, coupon: Coupon, order_context: OrderContext) -> CouponDiscountResult:
        # 折扣为运费本身，商品小计不变，运费由调用方另行抵扣
        return CouponDiscountResult(
            discount=order_context.shipping_cost,
            final_amount=order_context.subtotal,
            applied_coupon=coupon
        )


_FIXED_AMOUNT = FixedAmountStrategy()
_PERCENTAGE = PercentageStrategy()
_FREE_SHIPPING = FreeShippingStrategy()


def get_strategy(coupon_type) -> Optional[CouponStrategy]:
    """按优惠券类型选择策略，未知类型返回None"""
    if coupon_type == CouponType.FIXED_AMOUNT:
        return _FIXED_AMOUNT
    elif coupon_type == CouponType.PERCENTAGE:
        return _PERCENTAGE
    elif coupon_type == CouponType.FREE_SHIPPING:
        return _FREE_SHIPPING
    return None
