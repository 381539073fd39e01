"""
内容项模型 - 内容项索引记录
"""
from sqlalchemy import Column, String, DateTime, Boolean, Index

from ...core.database import BaseModel
from ...core.constants import DatabaseConstants


class ContentItem(BaseModel):
    """内容项模型

    每一行是内容项的一个版本；同一 content_item_id 的版本中最多一个
    latest，最多一个 published。
    """
    __tablename__ = "content_items"
    __table_args__ = (
        Index("ix_content_items_type_latest", "content_type", "latest"),
        Index("ix_content_items_type_published", "content_type", "published"),
    )

    content_item_id = Column(String(DatabaseConstants.CONTENT_ITEM_ID_MAX_LENGTH), nullable=False, index=True)
    content_item_version_id = Column(String(DatabaseConstants.CONTENT_ITEM_ID_MAX_LENGTH), nullable=False, unique=True)
    content_type = Column(String(DatabaseConstants.CONTENT_TYPE_NAME_MAX_LENGTH), nullable=False)
    display_text = Column(String(DatabaseConstants.DISPLAY_TEXT_MAX_LENGTH))
    published = Column(Boolean, default=False, nullable=False)
    latest = Column(Boolean, default=False, nullable=False)
    owner = Column(String(DatabaseConstants.USERNAME_MAX_LENGTH))
    author = Column(String(DatabaseConstants.USERNAME_MAX_LENGTH))
    modified_utc = Column(DateTime)
    published_utc = Column(DateTime)
    created_utc = Column(DateTime)

    def __repr__(self):
        return f"<ContentItem(content_item_id={self.content_item_id}, content_type={self.content_type})>"
