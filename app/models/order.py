"""
订单计算相关数据模型
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import Field

from app.models.coupon import CamelModel, Coupon, CouponType, Money, OrderItem


class OrderCalculationRequest(CamelModel):
    """订单计算请求"""

    order_items: List[OrderItem] = Field(default_factory=list, description="订单项")
    subtotal: Money = Field(..., ge=0, description="商品小计")
    shipping_cost: Optional[Money] = Field(None, ge=0, description="运费，为空时使用默认运费")
    coupon_ids: Optional[List[str]] = Field(None, description="选用的优惠券ID，按应用顺序排列")
    user_id: str = Field(..., description="用户ID")


class AppliedCouponDetail(CamelModel):
    """已应用优惠券明细"""

    id: str
    code: str
    name: str
    type: CouponType
    discount: Money = Field(..., description="该券在叠加顺序中实际贡献的折扣")


class OrderCalculationResult(CamelModel):
    """订单计算结果"""

    subtotal: Money = Field(..., description="商品小计")
    shipping_cost: Money = Field(..., description="运费")
    coupon_discount: Money = Field(default=Decimal('0'), description="优惠券折扣合计")
    final_amount: Money = Field(..., ge=0, description="应付金额")
    applied_coupons: List[AppliedCouponDetail] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list, description="未应用优惠券的原因")


class OrderCalculationPayload(CamelModel):
    """订单计算接口请求体：计算请求 + 已查出的用户优惠券"""

    request: OrderCalculationRequest
    coupons: List[Coupon] = Field(default_factory=list)


class CouponRecommendationRequest(CamelModel):
    """优惠券推荐请求"""

    user_id: str
    order_items: List[OrderItem] = Field(..., min_length=1, description="订单项")
    subtotal: Money = Field(..., ge=0, description="商品小计")
    coupons: List[Coupon] = Field(default_factory=list, description="候选优惠券")
