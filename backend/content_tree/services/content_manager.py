"""
内容管理器 - 创建内容项实例
"""
import uuid
from datetime import datetime, timezone

from ..domain.models.content_item import ContentItem
from ..core.constants import DatabaseConstants


def new_content_id() -> str:
    """生成内容项ID"""
    return uuid.uuid4().hex[:DatabaseConstants.CONTENT_ITEM_ID_MAX_LENGTH]


class ContentManager:
    """内容管理器"""

    def new(self, content_type: str) -> ContentItem:
        """创建指定类型的新内容项（未保存，无所有者）"""
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        return ContentItem(
            id=str(uuid.uuid4()),
            content_item_id=new_content_id(),
            content_item_version_id=new_content_id(),
            content_type=content_type,
            published=False,
            latest=False,
            owner=None,
            created_utc=now,
            modified_utc=now,
        )
