"""
授权服务
"""
from typing import Any, Optional

from .content_definition import ContentDefinitionManager
from ..core.permissions import ContentPermissionChecker, content_permission_checker
from ..domain.models.user import User
from ..core.logging import get_logger

logger = get_logger(__name__)

class AuthorizationService:
    """授权服务 - 检查用户对资源的权限"""

    def __init__(
        self,
        content_definition_manager: Optional[ContentDefinitionManager] = None,
        checker: ContentPermissionChecker = content_permission_checker
    ):
        self.content_definition_manager = content_definition_manager
        self.checker = checker

    async def authorize(self, user: Optional[User], permission: str, resource: Any = None) -> bool:
        """检查用户是否拥有权限"""
        if user is None:
            return False

        type_definition = None
        content_type = getattr(resource, "content_type", None)
        if content_type and self.content_definition_manager is not None:
            type_definition = await self.content_definition_manager.get_type_definition(content_type)

        authorized = self.checker.check_permission(user, resource, permission, type_definition)
        logger.debug(f"权限检查: 用户={user.username}, 权限={permission}, 类型={content_type}, 结果={authorized}")
        return authorized
