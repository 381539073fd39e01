"""
内容树路由单元测试

专注于测试：
- HTTP请求/响应
- 参数绑定
- 状态码与错误格式
"""
import pytest
from httpx import ASGITransport, AsyncClient
from urllib.parse import parse_qs, urlsplit

from content_tree.main import app
from content_tree.core.database import get_session
from content_tree.api.deps import get_optional_current_user


@pytest.fixture
async def client(seeded_session):
    """绑定测试数据库会话的客户端"""
    async def override_get_session():
        yield seeded_session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    """以指定用户身份请求"""
    def _login(user):
        app.dependency_overrides[get_optional_current_user] = lambda: user
    return _login


@pytest.mark.unit
class TestTreeRoutes:
    """树节点路由测试"""

    @pytest.mark.asyncio
    async def test_list_providers(self, client):
        """测试获取供应者列表"""
        response = await client.get("/api/content-tree/providers")

        assert response.status_code == 200
        assert "content-types" in response.json()["data"]

    @pytest.mark.asyncio
    async def test_root_children(self, client):
        """测试获取根节点的子节点"""
        response = await client.get("/api/content-tree/providers/content-types/children")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"] == [{
            "title": "内容类型",
            "type": "content-types",
            "id": "content-types",
            "is_leaf": False,
            "url": None,
        }]

    @pytest.mark.asyncio
    async def test_root_children_english(self, client):
        """测试按Accept-Language返回英文标题"""
        response = await client.get(
            "/api/content-tree/providers/content-types/children",
            headers={"Accept-Language": "en-US,en;q=0.9"}
        )

        assert response.json()["data"][0]["title"] == "Content Types"
        assert response.json()["message"] == "Success"

    @pytest.mark.asyncio
    async def test_content_types_children(self, client):
        """测试获取内容类型节点"""
        response = await client.get(
            "/api/content-tree/providers/content-types/children",
            params={"node_type": "content-types"}
        )

        nodes = response.json()["data"]
        assert [node["id"] for node in nodes] == ["Article", "BlogPost", "Page"]

        url = urlsplit(nodes[-1]["url"])
        assert url.path == "/api/content-tree/content-items"
        assert parse_qs(url.query) == {
            "providerId": ["content-types"],
            "providerParams[typename]": ["Page"],
        }

    @pytest.mark.asyncio
    async def test_unknown_node_type(self, client):
        """测试未知节点类型返回空列表"""
        response = await client.get(
            "/api/content-tree/providers/content-types/children",
            params={"node_type": "content-type", "node_id": "Page"}
        )

        assert response.status_code == 200
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_unknown_provider(self, client):
        """测试未知供应者返回404"""
        response = await client.get("/api/content-tree/providers/missing/children")

        assert response.status_code == 404
        assert response.json()["details"]["resource_id"] == "missing"

    @pytest.mark.asyncio
    async def test_get_node_not_implemented(self, client):
        """测试获取单个节点返回501"""
        response = await client.get("/api/content-tree/providers/content-types/nodes/content-type/Page")

        assert response.status_code == 501
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "该操作尚未实现"


@pytest.mark.unit
class TestContentItemRoutes:
    """内容项路由测试"""

    @pytest.mark.asyncio
    async def test_items_by_typename(self, client):
        """测试按类型获取内容项"""
        response = await client.get(
            "/api/content-tree/content-items",
            params={"providerId": "content-types", "providerParams[typename]": "Page"}
        )

        assert response.status_code == 200
        items = response.json()["data"]
        assert [item["content_item_version_id"] for item in items] == ["page-2-v2", "page-1-v1"]
        assert items[0]["published"] is False

    @pytest.mark.asyncio
    async def test_unknown_typename_is_bad_request(self, client):
        """测试未知类型返回400"""
        response = await client.get(
            "/api/content-tree/content-items",
            params={"providerParams[typename]": "Unknown"}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["details"]["field"] == "typename"
        assert data["details"]["content_type"] == "Unknown"

    @pytest.mark.asyncio
    async def test_unknown_status_falls_back_to_latest(self, client):
        """测试无法识别的状态按最新版本过滤"""
        response = await client.get("/api/content-tree/content-items", params={"status": "archived"})

        assert response.status_code == 200
        items = response.json()["data"]
        assert [item["content_item_version_id"] for item in items] == [
            "page-2-v2", "page-1-v1", "widget-1-v1", "article-2-v1", "article-1-v1"
        ]

    @pytest.mark.asyncio
    async def test_unknown_sort_field_falls_back_to_modified(self, client):
        """测试无法识别的排序字段按修改时间排序"""
        response = await client.get(
            "/api/content-tree/content-items",
            params={"sort_by": "title", "sort_direction": "ascending"}
        )

        assert response.status_code == 200
        items = response.json()["data"]
        assert [item["content_item_version_id"] for item in items] == [
            "article-1-v1", "article-2-v1", "widget-1-v1", "page-1-v1", "page-2-v2"
        ]

    @pytest.mark.asyncio
    async def test_unknown_sort_direction_is_descending(self, client):
        """测试无法识别的排序方向按降序排序"""
        response = await client.get(
            "/api/content-tree/content-items",
            params={"providerParams[typename]": "Page", "sort_direction": "sideways"}
        )

        items = response.json()["data"]
        assert [item["content_item_version_id"] for item in items] == ["page-2-v2", "page-1-v1"]

    @pytest.mark.asyncio
    async def test_invalid_owned_by_me_is_bad_request(self, client):
        """测试无效的布尔参数返回400"""
        response = await client.get("/api/content-tree/content-items", params={"owned_by_me": "maybe"})

        assert response.status_code == 400
        assert "validation_errors" in response.json()["details"]

    @pytest.mark.asyncio
    async def test_filters_and_sort(self, client):
        """测试状态过滤与排序参数"""
        response = await client.get(
            "/api/content-tree/content-items",
            params={"status": "published", "sort_by": "created", "sort_direction": "ascending"}
        )

        items = response.json()["data"]
        assert [item["content_item_version_id"] for item in items] == [
            "page-1-v1", "page-2-v1", "article-1-v1", "widget-1-v1"
        ]

    @pytest.mark.asyncio
    async def test_editor_owned_by_me(self, client, login_as, editor_user):
        """测试已登录用户只看自己的内容"""
        login_as(editor_user)

        response = await client.get("/api/content-tree/content-items", params={"owned_by_me": "true"})

        items = response.json()["data"]
        assert [item["content_item_id"] for item in items] == ["page-1", "article-2"]

    @pytest.mark.asyncio
    async def test_anonymous_owned_by_me(self, client):
        """测试匿名用户的“我的内容”为空"""
        response = await client.get("/api/content-tree/content-items", params={"owned_by_me": "true"})

        assert response.status_code == 200
        assert response.json()["data"] == []
