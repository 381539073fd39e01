"""
用户模型
"""
from enum import Enum

from sqlalchemy import Column, String

from ...core.database import BaseModel
from ...core.constants import DatabaseConstants


class UserRole(Enum):
    """用户角色枚举"""
    ADMIN = "admin"
    EDITOR = "editor"
    AUTHOR = "author"
    USER = "user"


class User(BaseModel):
    """用户模型 - SQLAlchemy版本"""
    __tablename__ = "users"

    username = Column(String(DatabaseConstants.USERNAME_MAX_LENGTH), unique=True, nullable=False)
    email = Column(String(DatabaseConstants.EMAIL_MAX_LENGTH), unique=True, nullable=False)
    full_name = Column(String(DatabaseConstants.FULL_NAME_MAX_LENGTH))
    role = Column(String(DatabaseConstants.ROLE_MAX_LENGTH), default=UserRole.USER.value)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
