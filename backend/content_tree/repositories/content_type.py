"""
内容类型定义Repository
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from ..core.repository import BaseRepository
from ..domain.models.content_type import ContentTypeDefinitionRecord
from ..core.logging import get_logger

logger = get_logger(__name__)

class ContentTypeRepository(BaseRepository[ContentTypeDefinitionRecord]):
    """内容类型定义Repository - 数据库操作"""

    def __init__(self, session: AsyncSession):
        super().__init__(ContentTypeDefinitionRecord, session)

    def _get_json_fields(self) -> List[str]:
        return ["settings"]

    async def list_ordered(self) -> List[ContentTypeDefinitionRecord]:
        """按注册顺序获取全部内容类型定义"""
        stmt = select(ContentTypeDefinitionRecord).order_by(
            ContentTypeDefinitionRecord.position,
            ContentTypeDefinitionRecord.name
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[ContentTypeDefinitionRecord]:
        """根据类型名称获取定义"""
        stmt = select(ContentTypeDefinitionRecord).where(ContentTypeDefinitionRecord.name == name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, data: Dict[str, Any]) -> ContentTypeDefinitionRecord:
        """按名称创建或更新类型定义"""
        existing = await self.get_by_name(data["name"])
        if existing is None:
            record = await self.create(dict(data))
            logger.info(f"内容类型定义已创建: {record.name}")
            return record

        for key, value in self._prepare_data(data).items():
            setattr(existing, key, value)
        await self._session.flush()
        logger.info(f"内容类型定义已更新: {existing.name}")
        return existing

    def load_settings(self, record: ContentTypeDefinitionRecord) -> Dict[str, Any]:
        """解析记录中的设置JSON"""
        settings = self._load_json(record.settings)
        return settings if isinstance(settings, dict) else {}

    def get_table_name(self) -> str:
        """获取表名"""
        return "content_type_definitions"
