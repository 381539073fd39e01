"""
Repository层 - 数据访问层
"""
from .user import UserRepository
from .content_item import ContentItemRepository, ContentItemQuery
from .content_type import ContentTypeRepository

__all__ = [
    "UserRepository",
    "ContentItemRepository",
    "ContentItemQuery",
    "ContentTypeRepository",
]
