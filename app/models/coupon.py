"""
优惠券相关数据模型
字段使用snake_case，序列化别名保持camelCase，与调用方既有的JSON契约一致
"""

from decimal import Decimal
from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator, model_validator
from pydantic.alias_generators import to_camel
from enum import Enum


# 金额：内部使用Decimal，JSON输出为数字
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


class CamelModel(BaseModel):
    """camelCase别名基类"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CouponType(str, Enum):
    """优惠券类型枚举"""
    FIXED_AMOUNT = "FIXED_AMOUNT"  # 固定金额券
    PERCENTAGE = "PERCENTAGE"  # 百分比折扣券
    FREE_SHIPPING = "FREE_SHIPPING"  # 免运费券


class Coupon(CamelModel):
    """优惠券基础模型"""

    id: str = Field(..., description="优惠券ID")
    code: str = Field(..., min_length=1, max_length=50, description="优惠券代码")
    name: str = Field(..., description="优惠券名称")
    description: Optional[str] = Field(None, max_length=500, description="优惠券描述")
    type: CouponType = Field(..., description="优惠券类型")
    value: Money = Field(..., ge=0, description="折扣值：固定金额或0-100的百分比，免运费券忽略")
    min_amount: Optional[Money] = Field(None, ge=0, description="最低订单金额")
    max_discount: Optional[Money] = Field(None, ge=0, description="最大折扣金额（仅百分比券）")
    start_date: datetime = Field(..., description="有效开始时间")
    end_date: datetime = Field(..., description="有效结束时间")
    usage_limit: Optional[int] = Field(None, ge=0, description="总使用次数限制")
    used_count: int = Field(default=0, ge=0, description="已使用次数")
    is_active: bool = Field(default=True, description="是否启用")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('value')
    @classmethod
    def validate_percentage_value(cls, v, info):
        """百分比折扣值不能超过100"""
        if info.data.get('type') == CouponType.PERCENTAGE and v > Decimal('100'):
            raise ValueError('百分比折扣值不能超过100')
        return v

    @model_validator(mode='after')
    def validate_validity_period(self):
        """验证有效期"""
        if _is_aware(self.start_date) != _is_aware(self.end_date):
            raise ValueError('开始时间与结束时间必须同时带时区或同时不带时区')
        if self.end_date < self.start_date:
            raise ValueError('结束时间不能早于开始时间')
        return self

    def usage_limit_reached(self) -> bool:
        """使用次数是否已达上限，usage_limit为空或0视为不限"""
        return bool(self.usage_limit) and self.used_count >= self.usage_limit


class OrderItem(CamelModel):
    """订单项"""

    product_id: str = Field(..., min_length=1, description="商品ID")
    quantity: int = Field(..., ge=1, description="数量")
    price: Money = Field(..., ge=0, description="单价")


class OrderContext(CamelModel):
    """订单计价上下文，由调用方构造，不做持久化"""

    subtotal: Money = Field(..., ge=0, description="商品小计（不含折扣和运费）")
    shipping_cost: Money = Field(default=Decimal('0'), ge=0, description="运费")
    user_id: str = Field(..., description="用户ID")
    items: List[OrderItem] = Field(default_factory=list, description="订单项（当前折扣计算不读取）")


class CouponValidationResult(CamelModel):
    """优惠券验证结果"""

    is_valid: bool = Field(..., description="是否有效")
    error: Optional[str] = Field(None, description="验证失败原因")


class CouponDiscountResult(CamelModel):
    """单张优惠券折扣结果"""

    discount: Money = Field(..., description="折扣金额")
    final_amount: Money = Field(..., description="折后金额")
    applied_coupon: Coupon = Field(..., description="应用的优惠券")


class CouponApplicationResult(CamelModel):
    """多张优惠券依次应用的汇总结果"""

    total_discount: Money = Field(default=Decimal('0'), description="总折扣金额")
    final_amount: Money = Field(..., description="最终金额")
    applied_coupons: List[Coupon] = Field(default_factory=list, description="成功应用的优惠券")
    errors: List[str] = Field(default_factory=list, description="未应用优惠券的原因")


class CouponCheckRequest(CamelModel):
    """单券校验/计算请求"""

    coupon: Coupon
    order_context: OrderContext


class CouponBatchRequest(CamelModel):
    """多券依次应用请求，coupons的顺序即应用顺序"""

    coupons: List[Coupon] = Field(default_factory=list)
    order_context: OrderContext
