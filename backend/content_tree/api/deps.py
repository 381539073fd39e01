"""
API依赖 - 定义API路由需要的依赖
统一的依赖注入入口，避免重复定义
"""
from typing import Optional, TypeVar

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import decode_token
from ..core.database import get_session
from ..core.context import RequestContext
from ..core.constants import APIConstants
from ..core.logging import get_logger
from ..core.messages import Language, get_message_manager
from ..core.urls import UrlHelper
from ..domain.schemas.base import ApiResponse
from ..domain.models.user import User
from ..repositories.user import UserRepository

logger = get_logger(__name__)
T = TypeVar('T')

# OAuth2 Token获取方式
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

def api_response(data: Optional[T] = None, code: int = APIConstants.HTTP_OK, message: str = "操作成功") -> ApiResponse[T]:
    """
    创建标准API响应

    Args:
        data: 响应数据
        code: 状态码，默认200
        message: 响应消息，默认"操作成功"

    Returns:
        标准API响应
    """
    return ApiResponse(
        success=code < 400,
        code=code,
        message=message,
        data=data
    )

# ============================================================================
# 用户认证依赖
# ============================================================================

async def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session)
) -> Optional[User]:
    """获取可选的当前用户，令牌缺失或无效时返回None"""
    if token is None:
        return None

    token_data = decode_token(token)
    if token_data is None:
        logger.info("认证凭据无效或已过期，按匿名用户处理")
        return None

    user = await UserRepository(session).get_by_username(token_data.username)
    if user is None:
        logger.info(f"令牌中的用户不存在: {token_data.username}")
    return user

# ============================================================================
# 请求上下文依赖
# ============================================================================

async def get_request_context(
    request: Request,
    current_user: Optional[User] = Depends(get_optional_current_user)
) -> RequestContext:
    """构建显式的请求上下文"""
    default_language = get_message_manager().default_language
    return RequestContext(
        user=current_user,
        url_helper=UrlHelper.from_request(request),
        language=Language.parse(request.headers.get("Accept-Language"), default_language),
        request_id=getattr(request.state, "request_id", None)
    )
