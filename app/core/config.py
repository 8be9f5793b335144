from decimal import Decimal
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):

    """运行环境枚举"""
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # 应用基础配置
    app_name: str = "Coupon Engine"
    app_version: str = "1.0.0"
    environment: Environment = Environment.TESTING
    debug: bool = False  # 开启后500错误返回调试堆栈，不走统一错误响应

    # 服务监听配置
    host: str = "0.0.0.0"
    port: int = 8002

    # 订单计算配置
    default_shipping_cost: Decimal = Decimal("10")  # 默认运费

    # 日志配置
    log_level: str = "INFO"
    log_json: bool = False  # 生产环境输出JSON日志


# 全局配置实例
settings = Settings()
