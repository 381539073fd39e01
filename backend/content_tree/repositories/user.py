"""
用户Repository - 用户数据访问层
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from ..core.repository import BaseRepository
from ..domain.models.user import User
from ..core.logging import get_logger

logger = get_logger(__name__)

class UserRepository(BaseRepository[User]):
    """用户Repository - 数据库操作"""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_username(self, username: str) -> Optional[User]:
        """根据用户名获取用户"""
        stmt = select(User).where(User.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def get_table_name(self) -> str:
        """获取表名"""
        return "users"
