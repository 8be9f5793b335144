"""
优惠券业务服务层
按类型分派计算策略，提供单券校验/计算以及多券依次叠加
纯计算，不访问数据库，不抛异常
"""

from typing import List, Optional
from decimal import Decimal

from app.models.coupon import (
    Coupon,
    CouponApplicationResult,
    CouponDiscountResult,
    CouponValidationResult,
    OrderContext,
)
from app.services.coupon_strategies import COUPON_UNSUPPORTED_TYPE, get_strategy


class CouponService:
    """优惠券计算服务"""

    def validate_coupon(
        self,
        coupon: Coupon,
        order_context: OrderContext
    ) -> CouponValidationResult:
        """校验优惠券，返回是否可用及失败原因"""
        strategy = get_strategy(coupon.type)
        if strategy is None:
            return CouponValidationResult(is_valid=False, error=COUPON_UNSUPPORTED_TYPE)

        return strategy.validate(coupon, order_context)

    def calculate_discount(
        self,
        coupon: Coupon,
        order_context: OrderContext
    ) -> Optional[CouponDiscountResult]:
        """计算单张优惠券折扣，不可用时返回None（原因需通过validate_coupon获取）"""
        validation = self.validate_coupon(coupon, order_context)
        if not validation.is_valid:
            return None

        strategy = get_strategy(coupon.type)
        if strategy is None:
            return None

        return strategy.calculate_discount(coupon, order_context)

    def apply_coupons(
        self,
        coupons: List[Coupon],
        order_context: OrderContext
    ) -> CouponApplicationResult:
        """
        按列表顺序依次应用多张优惠券

        每张券基于前一张券折后的小计计算，折扣逐级叠加而非都基于原始小计，
        因此券的顺序会影响结果。不可用的券跳过并记录原因，不影响其余券。
        """
        total_discount = Decimal("0")
        current_subtotal = order_context.subtotal
        applied_coupons: List[Coupon] = []
        errors: List[str] = []

        for coupon in coupons:
            current_context = order_context.model_copy(update={"subtotal": current_subtotal})
            result = self.calculate_discount(coupon, current_context)

            if result is not None:
                total_discount += result.discount
                current_subtotal = result.final_amount
                applied_coupons.append(coupon)
            else:
                validation = self.validate_coupon(coupon, current_context)
                if validation.error:
                    errors.append(f"{coupon.code}: {validation.error}")

        return CouponApplicationResult(
            total_discount=total_discount,
            final_amount=current_subtotal,
            applied_coupons=applied_coupons,
            errors=errors
        )

    def get_best_coupon(
        self,
        coupons: List[Coupon],
        order_context: OrderContext
    ) -> Optional[CouponDiscountResult]:
        """从候选券中选出单独使用时折扣最大的一张，折扣相同取靠前的"""
        best_result = None

        for coupon in coupons:
            result = self.calculate_discount(coupon, order_context)
            if result is not None and (best_result is None or result.discount > best_result.discount):
                best_result = result

        return best_result


# 全局服务实例
coupon_service = CouponService()
