"""
测试配置文件 - pytest fixtures和共用配置
"""

import pytest
from decimal import Decimal
from datetime import datetime, timedelta

from app.models.coupon import Coupon, CouponType, OrderContext, OrderItem


@pytest.fixture
def make_coupon():
    """优惠券工厂，默认生成当前有效、无门槛、不限次数的固定金额券"""
    def _make(**overrides):
        now = datetime.now()
        data = {
            "id": "coupon_001",
            "code": "SAVE20",
            "name": "满减20元券",
            "type": CouponType.FIXED_AMOUNT,
            "value": Decimal("20"),
            "start_date": now - timedelta(days=1),
            "end_date": now + timedelta(days=30),
            "used_count": 0,
            "is_active": True,
        }
        data.update(overrides)
        return Coupon(**data)

    return _make


@pytest.fixture
def sample_items():
    """示例订单项"""
    return [
        OrderItem(product_id="prod_001", quantity=2, price=Decimal("50")),
        OrderItem(product_id="prod_002", quantity=1, price=Decimal("100")),
    ]


@pytest.fixture
def make_context(sample_items):
    """订单上下文工厂"""
    def _make(subtotal="200", shipping_cost="10", user_id="test_user_001"):
        return OrderContext(
            subtotal=Decimal(subtotal),
            shipping_cost=Decimal(shipping_cost),
            user_id=user_id,
            items=sample_items
        )

    return _make


@pytest.fixture
def expired_coupon(make_coupon):
    """已过期的优惠券"""
    now = datetime.now()
    return make_coupon(
        id="coupon_expired",
        code="EXPIRED10",
        name="过期券",
        start_date=now - timedelta(days=30),
        end_date=now - timedelta(days=1),
    )
