"""
错误处理模块 - 定义自定义异常和错误处理器
"""
from datetime import datetime
from typing import Dict, Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .constants import APIConstants

class BaseAppException(Exception):
    """应用基础异常类"""
    def __init__(
        self,
        message: str,
        status_code: int = APIConstants.HTTP_INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class BusinessException(BaseAppException):
    """业务逻辑异常"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, APIConstants.HTTP_BAD_REQUEST, details)

class ValidationException(BusinessException):
    """数据验证异常（参数无效）"""
    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message, details)

class AuthenticationException(BaseAppException):
    """认证异常"""
    def __init__(self, message: str = "认证失败", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, APIConstants.HTTP_UNAUTHORIZED, details)

class NotFoundException(BaseAppException):
    """资源未找到异常"""
    def __init__(self, message: str = "资源不存在", resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, APIConstants.HTTP_NOT_FOUND, details)

# 业务特定异常

class ContentTypeNotFoundException(ValidationException):
    """内容类型不存在异常（请求参数无效）"""
    def __init__(self, type_name: str):
        super().__init__(
            f"内容类型 {type_name} 不存在",
            field="typename",
            details={"content_type": type_name}
        )

class TreeNodeProviderNotFoundException(NotFoundException):
    """树节点供应者未找到异常"""
    def __init__(self, provider_id: str):
        super().__init__(f"树节点供应者 {provider_id} 不存在", "tree_node_provider", provider_id)

# 异常处理器

def _error_content(request: Request, code: int, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """构建统一的错误响应内容"""
    content = {
        "success": False,
        "code": code,
        "message": message,
        "timestamp": datetime.now().isoformat(),
        "path": str(request.url.path)
    }
    if details is not None:
        content["details"] = details
    return content

async def base_exception_handler(request: Request, exc: BaseAppException):
    """基础异常处理器"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.status_code, exc.message, exc.details)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """验证异常处理器"""
    return JSONResponse(
        status_code=APIConstants.HTTP_BAD_REQUEST,
        content=_error_content(
            request,
            APIConstants.HTTP_BAD_REQUEST,
            "请求参数验证失败",
            {"validation_errors": jsonable_errors(exc)}
        )
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP异常处理器"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.status_code, exc.detail)
    )

def jsonable_errors(exc: RequestValidationError):
    """将验证错误转换为可序列化的列表"""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]

def register_exception_handlers(app):
    """注册异常处理器"""
    app.add_exception_handler(BaseAppException, base_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
