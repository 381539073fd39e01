"""
树节点供应者基类与注册表单元测试
"""
import pytest

from content_tree.core.errors import TreeNodeProviderNotFoundException
from content_tree.services.content_tree import ContentTreeNodeProvider
from content_tree.services.tree_provider import TreeNodeProvider, TreeNodeProviderRegistry


class ChildrenOnlyProvider(TreeNodeProvider):
    """只提供树节点、不提供内容项的供应者"""

    @property
    def name(self):
        return "Children only"

    @property
    def id(self):
        return "children-only"

    async def get_children(self, node_type, node_id, context):
        return []

    def get(self, node_type, node_id):
        raise NotImplementedError


@pytest.mark.unit
class TestTreeNodeProvider:
    """供应者基类测试"""

    def test_content_items_required(self):
        """测试供应者必须实现内容项查询"""
        with pytest.raises(TypeError) as exc_info:
            ChildrenOnlyProvider()

        assert "get_content_items" in str(exc_info.value)

    def test_content_tree_provider_implements_all(self):
        """测试内容类型供应者实现了全部抽象方法"""
        assert ContentTreeNodeProvider.__abstractmethods__ == frozenset()


@pytest.mark.unit
class TestTreeNodeProviderRegistry:
    """供应者注册表测试"""

    def test_register_and_create(self, mock_db_session):
        """测试注册后按ID创建绑定会话的供应者"""
        registry = TreeNodeProviderRegistry()
        registry.register("content-types", ContentTreeNodeProvider)

        provider = registry.create("content-types", mock_db_session)

        assert isinstance(provider, ContentTreeNodeProvider)
        assert registry.ids() == ["content-types"]

    def test_unknown_provider(self):
        """测试未注册的供应者"""
        registry = TreeNodeProviderRegistry()

        with pytest.raises(TreeNodeProviderNotFoundException) as exc_info:
            registry.get("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details["resource_id"] == "missing"
