"""
领域模型模块
"""

from .user import User, UserRole
from .content_item import ContentItem
from .content_type import ContentTypeDefinitionRecord

__all__ = [
    "User",
    "UserRole",
    "ContentItem",
    "ContentTypeDefinitionRecord",
]
