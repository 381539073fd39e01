"""
请求上下文 - 显式传递给各个操作的当前用户、URL生成器和语言
"""
from dataclasses import dataclass, field
from typing import Optional

from .messages import Language
from .urls import UrlHelper
from ..domain.models.user import User


@dataclass
class RequestContext:
    """请求上下文"""
    user: Optional[User] = None
    url_helper: Optional[UrlHelper] = None
    language: Optional[Language] = None
    request_id: Optional[str] = field(default=None)

    @property
    def username(self) -> Optional[str]:
        """当前用户名，匿名时为None"""
        return self.user.username if self.user is not None else None
