"""
内容项Repository - 内容项索引的查询构建
"""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.sql import Select

from ..core.repository import BaseRepository
from ..domain.models.content_item import ContentItem
from ..core.logging import get_logger

logger = get_logger(__name__)


class ContentItemQuery:
    """内容项查询

    每次调用 where/order_by 都返回新的查询对象，原查询保持不变；
    list() 执行查询并返回全部结果。
    """

    def __init__(self, session: AsyncSession, statement: Optional[Select] = None):
        self._session = session
        self._statement = statement if statement is not None else select(ContentItem)

    @property
    def statement(self) -> Select:
        """当前的SQL语句"""
        return self._statement

    def where(self, *criteria) -> "ContentItemQuery":
        """追加过滤条件（AND）"""
        return ContentItemQuery(self._session, self._statement.where(*criteria))

    def order_by(self, column) -> "ContentItemQuery":
        """升序排序，替换之前的排序"""
        return ContentItemQuery(self._session, self._statement.order_by(None).order_by(column.asc()))

    def order_by_descending(self, column) -> "ContentItemQuery":
        """降序排序，替换之前的排序"""
        return ContentItemQuery(self._session, self._statement.order_by(None).order_by(column.desc()))

    async def list(self) -> List[ContentItem]:
        """执行查询"""
        result = await self._session.execute(self._statement)
        return list(result.scalars().all())


class ContentItemRepository(BaseRepository[ContentItem]):
    """内容项Repository - 数据库操作"""

    def __init__(self, session: AsyncSession):
        super().__init__(ContentItem, session)

    def query(self) -> ContentItemQuery:
        """创建内容项查询"""
        return ContentItemQuery(self._session)

    def get_table_name(self) -> str:
        """获取表名"""
        return "content_items"
