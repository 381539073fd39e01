"""
pytest配置文件 - 全局fixtures和测试配置
"""
import pytest
from unittest.mock import Mock, AsyncMock
from typing import AsyncGenerator, Callable, List
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from content_tree.core.database import Base
from content_tree.core.context import RequestContext
from content_tree.core.urls import UrlHelper
from content_tree.domain.models.user import User, UserRole
from content_tree.domain.schemas.content_tree import ContentTypeDefinition
from content_tree.services.content_definition import ContentDefinitionManager
# 导入模型以注册数据表
from content_tree.domain import models  # noqa: F401
from tests.factories import TestDataBuilder

# 测试数据库配置
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

@pytest.fixture
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """创建异步数据库会话（内存数据库，每个测试独立）"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()

@pytest.fixture
def mock_db_session() -> Mock:
    """Mock数据库会话"""
    session = Mock(spec=AsyncSession)
    session.add = Mock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    return session

@pytest.fixture
def type_definitions() -> List[ContentTypeDefinition]:
    """标准内容类型定义"""
    return TestDataBuilder.create_type_definitions()

@pytest.fixture
async def seeded_session(async_session: AsyncSession, type_definitions) -> AsyncSession:
    """写入了内容类型和内容项的会话"""
    manager = ContentDefinitionManager(async_session)
    for position, definition in enumerate(type_definitions):
        await manager.store_type_definition(definition, position=position)

    async_session.add_all(TestDataBuilder.create_content_items())
    await async_session.flush()
    return async_session

@pytest.fixture
def sample_user() -> User:
    """普通用户"""
    return TestDataBuilder.create_user()

@pytest.fixture
def admin_user() -> User:
    """管理员用户"""
    return TestDataBuilder.create_user(id="admin-id", username="admin", role=UserRole.ADMIN.value)

@pytest.fixture
def editor_user() -> User:
    """编辑用户"""
    return TestDataBuilder.create_user(id="alice-id", username="alice", role=UserRole.EDITOR.value)

@pytest.fixture
def author_user() -> User:
    """作者用户（只能编辑自己的内容）"""
    return TestDataBuilder.create_user(id="bob-id", username="bob", role=UserRole.AUTHOR.value)

@pytest.fixture
def url_helper() -> UrlHelper:
    """不依赖应用路由的URL生成器"""
    routes = {"get_content_items": "/api/content-tree/content-items"}

    def url_path_for(name: str, **path_params) -> str:
        return routes[name]

    return UrlHelper(url_path_for)

@pytest.fixture
def make_context(url_helper) -> Callable[..., RequestContext]:
    """请求上下文工厂"""
    def _make(user=None, language=None, with_urls=True) -> RequestContext:
        return RequestContext(
            user=user,
            url_helper=url_helper if with_urls else None,
            language=language
        )
    return _make

# 测试标记
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "integration: 集成测试")
    config.addinivalue_line("markers", "slow: 慢速测试")
