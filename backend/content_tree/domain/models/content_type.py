"""
内容类型定义模型
"""
from sqlalchemy import Column, String, Text, Integer

from ...core.database import BaseModel
from ...core.constants import DatabaseConstants


class ContentTypeDefinitionRecord(BaseModel):
    """内容类型定义存储记录

    settings 以JSON文本存储，由内容定义管理器加载为强类型设置。
    """
    __tablename__ = "content_type_definitions"

    name = Column(String(DatabaseConstants.CONTENT_TYPE_NAME_MAX_LENGTH), unique=True, nullable=False)
    display_name = Column(String(DatabaseConstants.CONTENT_TYPE_NAME_MAX_LENGTH), nullable=False)
    settings = Column(Text)  # JSON string
    position = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<ContentTypeDefinitionRecord(name={self.name}, display_name={self.display_name})>"
