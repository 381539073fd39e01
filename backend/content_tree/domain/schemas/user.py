"""
用户相关的数据模型
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class TokenData(BaseModel):
    """令牌数据模型"""
    username: Optional[str] = Field(default=None, description="用户名")
    user_id: Optional[str] = Field(default=None, description="用户ID")
    role: Optional[str] = Field(default=None, description="角色")
    exp: Optional[datetime] = Field(default=None, description="过期时间")
