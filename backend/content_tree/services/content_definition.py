"""
内容定义管理器 - 内容类型注册表
"""
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.content_type import ContentTypeRepository
from ..domain.models.content_type import ContentTypeDefinitionRecord
from ..domain.schemas.content_tree import ContentTypeDefinition, ContentTypeSettings
from ..core.logging import get_logger

logger = get_logger(__name__)

class ContentDefinitionManager:
    """内容定义管理器

    从存储中加载内容类型定义，并把设置解析为强类型的 ContentTypeSettings。
    """

    def __init__(self, session: AsyncSession):
        self.repository = ContentTypeRepository(session)

    def _to_definition(self, record: ContentTypeDefinitionRecord) -> ContentTypeDefinition:
        """将存储记录转换为类型定义"""
        raw_settings = self.repository.load_settings(record)
        try:
            settings = ContentTypeSettings.model_validate(raw_settings)
        except ValidationError as e:
            logger.warning(f"内容类型 {record.name} 的设置无效，使用默认设置: {str(e)}")
            settings = ContentTypeSettings()

        return ContentTypeDefinition(
            name=record.name,
            display_name=record.display_name or record.name,
            settings=settings
        )

    async def list_type_definitions(self) -> List[ContentTypeDefinition]:
        """获取全部内容类型定义（注册顺序）"""
        records = await self.repository.list_ordered()
        return [self._to_definition(record) for record in records]

    async def get_type_definition(self, name: str) -> Optional[ContentTypeDefinition]:
        """根据名称获取内容类型定义，不存在时返回None"""
        if not name:
            return None
        record = await self.repository.get_by_name(name)
        if record is None:
            return None
        return self._to_definition(record)

    async def store_type_definition(self, definition: ContentTypeDefinition, position: Optional[int] = None) -> ContentTypeDefinition:
        """保存内容类型定义"""
        data = {
            "name": definition.name,
            "display_name": definition.display_name,
            "settings": definition.settings.model_dump(),
        }
        if position is not None:
            data["position"] = position

        record = await self.repository.upsert(data)
        return self._to_definition(record)
