"""
数据库连接模块 - 使用 SQLAlchemy ORM
"""
import uuid
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, DateTime, func

from .config import get_settings
from .logging import get_logger

logger = get_logger(__name__)

# SQLAlchemy Base
Base = declarative_base()

class BaseModel(Base):
    """数据库模型基类"""
    __abstract__ = True

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

class DatabaseManager:
    """数据库管理器 - 使用 SQLAlchemy

    引擎在第一次使用时创建，导入模块不会连接数据库。
    """

    def __init__(self, database_url: Optional[str] = None):
        self.settings = get_settings()
        self.database_url = database_url or self.settings.get_database_url()
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def engine(self) -> AsyncEngine:
        """获取数据库引擎"""
        if self._engine is None:
            logger.info(f"使用数据库: {self.database_url.split('@')[-1]}")
            self._prepare_sqlite_directory()
            self._engine = create_async_engine(self.database_url, **self.settings.get_engine_params())
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=True,
            )
        return self._engine

    @property
    def async_session(self) -> async_sessionmaker:
        """获取会话工厂"""
        if self._session_factory is None:
            self.engine
        return self._session_factory

    def _prepare_sqlite_directory(self) -> None:
        """确保SQLite数据库文件所在目录存在"""
        prefix = "sqlite+aiosqlite:///"
        if self.database_url.startswith(prefix) and ":memory:" not in self.database_url:
            Path(self.database_url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """获取数据库会话"""
        async with self.async_session() as session:
            try:
                yield session
                # 在正常情况下提交事务
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self):
        """创建数据库表"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        """关闭引擎和连接池"""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

# 全局数据库管理器实例
db_manager = DatabaseManager()

# 全局get_session函数，用于FastAPI依赖注入
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话（全局函数）"""
    async for session in db_manager.get_session():
        yield session
