"""
权限检查器 - 统一处理内容权限检查逻辑
"""
from typing import Any, Iterable, Optional, Set
from abc import ABC, abstractmethod

from .constants import Permissions, ROLE_PERMISSIONS
from ..domain.models.user import User, UserRole
from ..domain.schemas.content_tree import ContentTypeDefinition

class PermissionChecker(ABC):
    """权限检查器基类"""

    @abstractmethod
    def check_permission(self, user: Optional[User], resource: Any, action: str) -> bool:
        """检查权限"""
        pass

def get_role_permissions(role: Optional[str]) -> Set[str]:
    """获取角色被授予的权限"""
    return set(ROLE_PERMISSIONS.get(role or "", ()))

class ContentPermissionChecker(PermissionChecker):
    """内容权限检查器"""

    def check_permission(
        self,
        user: Optional[User],
        content_item: Any,
        action: str,
        type_definition: Optional[ContentTypeDefinition] = None
    ) -> bool:
        """检查用户对内容项的权限"""
        if not user:
            return False

        # 管理员拥有所有权限
        if user.role == UserRole.ADMIN.value:
            return True

        granted = get_role_permissions(user.role)
        if self._is_granted(granted, action, type_definition):
            return True

        # 编辑权限可由“编辑自己的内容”满足
        if action == Permissions.EDIT_CONTENT:
            owner = getattr(content_item, "owner", None)
            if owner is not None and owner == user.username:
                return self._is_granted(granted, Permissions.EDIT_OWN_CONTENT, type_definition)

        return False

    def _is_granted(
        self,
        granted: Iterable[str],
        action: str,
        type_definition: Optional[ContentTypeDefinition]
    ) -> bool:
        """检查权限是否被授予，可保护的类型同时接受类型专属权限"""
        if action in granted:
            return True
        if type_definition is not None and type_definition.settings.securable:
            return Permissions.for_type(action, type_definition.name) in granted
        return False

# 全局权限检查器实例
content_permission_checker = ContentPermissionChecker()
