"""
订单计算服务
汇总商品小计、运费与优惠券折扣，得到订单应付金额；并为用户推荐最优优惠券
优惠券记录由调用方从存储中查出后传入
"""

from typing import Dict, List, Optional
from decimal import Decimal

import structlog

from app.api.exceptions import NotFoundException, ValidationException
from app.core.config import settings
from app.models.coupon import Coupon, OrderContext, OrderItem
from app.models.order import AppliedCouponDetail, OrderCalculationRequest, OrderCalculationResult
from app.services.coupon_service import CouponService
from app.services.coupon_strategies import get_strategy

logger = structlog.get_logger(__name__)


class OrderCalculationService:
    """订单计算服务"""

    def __init__(
        self,
        coupon_service: Optional[CouponService] = None,
        default_shipping_cost: Optional[Decimal] = None
    ):
        self.coupon_service = coupon_service or CouponService()
        self.default_shipping_cost = (
            default_shipping_cost if default_shipping_cost is not None
            else settings.default_shipping_cost
        )

    def calculate_order(
        self,
        request: OrderCalculationRequest,
        coupons: List[Coupon]
    ) -> OrderCalculationResult:
        """
        计算订单总价

        应付金额 = max(0, 小计 + 运费 - 优惠券折扣合计)。
        免运费券的折扣即运费，在这里从总价中抵扣。
        """
        self._validate_order_items(request.order_items)

        shipping_cost = (
            request.shipping_cost if request.shipping_cost is not None
            else self.default_shipping_cost
        )
        selected_coupons = self._select_coupons(coupons, request.coupon_ids)
        order_context = self._build_order_context(
            request.user_id, request.order_items, request.subtotal, shipping_cost
        )

        coupon_result = self.coupon_service.apply_coupons(selected_coupons, order_context)
        final_amount = max(
            Decimal("0"),
            request.subtotal + shipping_cost - coupon_result.total_discount
        )

        if coupon_result.errors:
            logger.warning(
                "部分优惠券未能应用",
                user_id=request.user_id,
                errors=coupon_result.errors
            )

        logger.info(
            "订单计算完成",
            user_id=request.user_id,
            subtotal=str(request.subtotal),
            shipping_cost=str(shipping_cost),
            coupon_discount=str(coupon_result.total_discount),
            final_amount=str(final_amount),
            applied_count=len(coupon_result.applied_coupons)
        )

        return OrderCalculationResult(
            subtotal=request.subtotal,
            shipping_cost=shipping_cost,
            coupon_discount=coupon_result.total_discount,
            final_amount=final_amount,
            applied_coupons=self._applied_coupon_details(
                coupon_result.applied_coupons, order_context
            ),
            errors=coupon_result.errors
        )

    def recommend_coupons(
        self,
        user_id: str,
        order_items: List[OrderItem],
        subtotal: Decimal,
        coupons: List[Coupon]
    ) -> List[str]:
        """推荐单独使用时折扣最大的优惠券，返回其ID列表（最多一个）"""
        order_context = self._build_order_context(
            user_id, order_items, subtotal, self.default_shipping_cost
        )
        best = self.coupon_service.get_best_coupon(coupons, order_context)
        if best is None:
            logger.info("没有可推荐的优惠券", user_id=user_id, candidates=len(coupons))
            return []

        logger.info(
            "推荐优惠券",
            user_id=user_id,
            coupon_code=best.applied_coupon.code,
            discount=str(best.discount)
        )
        return [best.applied_coupon.id]

    def _validate_order_items(self, order_items: List[OrderItem]) -> None:
        """验证订单项"""
        if not order_items:
            raise ValidationException("订单项不能为空")

    def _select_coupons(
        self,
        coupons: List[Coupon],
        coupon_ids: Optional[List[str]]
    ) -> List[Coupon]:
        """按coupon_ids的顺序挑选优惠券，未指定时使用全部传入的券"""
        if coupon_ids is None:
            return list(coupons)

        coupons_by_id: Dict[str, Coupon] = {coupon.id: coupon for coupon in coupons}
        selected = []
        seen = set()
        for coupon_id in coupon_ids:
            if coupon_id in seen:
                continue
            coupon = coupons_by_id.get(coupon_id)
            if coupon is None:
                raise NotFoundException(f"优惠券 {coupon_id}")
            selected.append(coupon)
            seen.add(coupon_id)

        return selected

    def _build_order_context(
        self,
        user_id: str,
        order_items: List[OrderItem],
        subtotal: Decimal,
        shipping_cost: Decimal
    ) -> OrderContext:
        """构造优惠券计算上下文"""
        return OrderContext(
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            user_id=user_id,
            items=list(order_items)
        )

    def _applied_coupon_details(
        self,
        applied_coupons: List[Coupon],
        order_context: OrderContext
    ) -> List[AppliedCouponDetail]:
        """
        按叠加顺序重放已应用的券，得到每张券实际贡献的折扣

        这些券已通过校验，这里直接调用策略计算，不再重复校验
        """
        details = []
        current_subtotal = order_context.subtotal

        for coupon in applied_coupons:
            current_context = order_context.model_copy(update={"subtotal": current_subtotal})
            result = get_strategy(coupon.type).calculate_discount(coupon, current_context)
            current_subtotal = result.final_amount

            details.append(AppliedCouponDetail(
                id=coupon.id,
                code=coupon.code,
                name=coupon.name,
                type=coupon.type,
                discount=result.discount
            ))

        return details


# 全局服务实例
order_calculation_service = OrderCalculationService()
