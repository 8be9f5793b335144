"""
业务异常定义与FastAPI异常处理器
统一返回 {success: false, error: {code, message, details}, timestamp}
"""

import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        message: str,
        code: str = "BUSINESS_ERROR",
        status_code: int = 400,
        details: Optional[Any] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class ValidationException(BusinessException):
    """请求数据校验失败"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class NotFoundException(BusinessException):
    """资源不存在"""

    def __init__(self, resource: str = "资源", details: Optional[Any] = None):
        super().__init__(f"{resource}未找到", code="NOT_FOUND", status_code=404, details=details)


def error_response(status_code: int, code: str, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details),
            },
            "timestamp": datetime.now().isoformat(),
        }
    )


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """业务异常处理"""
    logger.warning(f"业务异常 {exc.code}: {exc.message} ({request.url.path})")
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求参数校验异常处理"""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", [])),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    logger.info(f"请求参数校验失败: {request.url.path}")
    return error_response(422, "VALIDATION_ERROR", "请求参数校验失败", errors)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未预期异常处理"""
    logger.exception(f"服务器内部错误: {request.url.path}")
    return error_response(500, "INTERNAL_ERROR", "服务器内部错误")
