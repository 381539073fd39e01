"""
授权服务与权限检查器单元测试
"""
import pytest
from unittest.mock import AsyncMock, Mock

from content_tree.core import constants
from content_tree.core.constants import Permissions
from content_tree.core.permissions import ContentPermissionChecker, get_role_permissions
from content_tree.domain.models.user import UserRole
from content_tree.services.authorization import AuthorizationService
from content_tree.services.content_manager import ContentManager
from tests.factories import ContentItemFactory, TestDataBuilder


@pytest.mark.unit
class TestContentPermissionChecker:
    """内容权限检查器测试"""

    @pytest.fixture
    def checker(self):
        return ContentPermissionChecker()

    def test_anonymous_denied(self, checker):
        """测试匿名用户没有权限"""
        assert checker.check_permission(None, None, Permissions.EDIT_CONTENT) is False

    def test_admin_granted(self, checker, admin_user):
        """测试管理员拥有所有权限"""
        assert checker.check_permission(admin_user, None, "anything") is True

    def test_editor_granted_edit(self, checker, editor_user):
        """测试编辑角色拥有编辑权限"""
        item = ContentManager().new("Page")
        assert checker.check_permission(editor_user, item, Permissions.EDIT_CONTENT) is True

    def test_user_denied_edit(self, checker, sample_user):
        """测试普通用户没有编辑权限"""
        item = ContentManager().new("Page")
        assert checker.check_permission(sample_user, item, Permissions.EDIT_CONTENT) is False
        assert checker.check_permission(sample_user, item, Permissions.VIEW_CONTENT) is True

    def test_author_can_edit_own_content(self, checker, author_user):
        """测试作者可以编辑自己的内容"""
        own = ContentItemFactory(owner=author_user.username)
        other = ContentItemFactory(owner="someone-else")

        assert checker.check_permission(author_user, own, Permissions.EDIT_CONTENT) is True
        assert checker.check_permission(author_user, other, Permissions.EDIT_CONTENT) is False

    def test_author_cannot_edit_new_item(self, checker, author_user):
        """测试新建内容项没有所有者，作者不能编辑"""
        item = ContentManager().new("Page")
        assert checker.check_permission(author_user, item, Permissions.EDIT_CONTENT) is False

    def test_securable_type_accepts_type_permission(self, checker, sample_user, monkeypatch):
        """测试可保护类型接受类型专属权限"""
        definition = TestDataBuilder.create_type_definition("Article", securable=True)
        item = ContentManager().new("Article")
        monkeypatch.setitem(
            constants.ROLE_PERMISSIONS,
            UserRole.USER.value,
            (Permissions.for_type(Permissions.EDIT_CONTENT, "Article"),)
        )

        assert checker.check_permission(sample_user, item, Permissions.EDIT_CONTENT, definition) is True
        assert checker.check_permission(sample_user, item, Permissions.EDIT_CONTENT) is False

    def test_role_permissions(self):
        """测试角色权限映射"""
        assert Permissions.EDIT_CONTENT in get_role_permissions(UserRole.EDITOR.value)
        assert get_role_permissions(None) == set()
        assert get_role_permissions("unknown") == set()


@pytest.mark.unit
class TestAuthorizationService:
    """授权服务测试"""

    @pytest.fixture
    def definition_manager(self):
        manager = Mock()
        manager.get_type_definition = AsyncMock(
            return_value=TestDataBuilder.create_type_definition("Page", listable=True)
        )
        return manager

    @pytest.mark.asyncio
    async def test_anonymous_not_authorized(self, definition_manager):
        """测试匿名用户未授权"""
        service = AuthorizationService(definition_manager)

        assert await service.authorize(None, Permissions.EDIT_CONTENT, ContentManager().new("Page")) is False
        definition_manager.get_type_definition.assert_not_called()

    @pytest.mark.asyncio
    async def test_type_definition_passed_to_checker(self, definition_manager, editor_user):
        """测试类型定义传递给权限检查器"""
        checker = Mock()
        checker.check_permission.return_value = True
        service = AuthorizationService(definition_manager, checker)
        item = ContentManager().new("Page")

        # Act
        result = await service.authorize(editor_user, Permissions.EDIT_CONTENT, item)

        # Assert
        assert result is True
        definition_manager.get_type_definition.assert_awaited_once_with("Page")
        checker.check_permission.assert_called_once_with(
            editor_user, item, Permissions.EDIT_CONTENT, definition_manager.get_type_definition.return_value
        )

    @pytest.mark.asyncio
    async def test_without_resource(self, definition_manager, editor_user):
        """测试没有资源时不查询类型定义"""
        service = AuthorizationService(definition_manager)

        assert await service.authorize(editor_user, Permissions.VIEW_CONTENT) is True
        definition_manager.get_type_definition.assert_not_called()
