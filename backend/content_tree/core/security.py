"""
安全相关功能 - JWT令牌
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from pydantic import ValidationError

from ..domain.schemas.user import TokenData
from .config import get_settings

# 创建访问令牌
def create_access_token(
    user_id: str,
    username: str,
    role: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """创建访问令牌"""
    settings = get_settings()
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": user_id,
        "username": username,
        "role": role,
        "exp": expire
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

# 验证令牌
def decode_token(token: str) -> Optional[TokenData]:
    """解码并验证令牌，无效或过期时返回None"""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )

        user_id: str = payload.get("sub")
        username: str = payload.get("username")
        exp = payload.get("exp")

        if user_id is None or username is None:
            return None

        return TokenData(
            user_id=user_id,
            username=username,
            role=payload.get("role"),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
        )
    except (JWTError, ValidationError):
        return None
