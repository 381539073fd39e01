"""
配置模块 - 提供应用配置和环境变量处理
"""
from functools import lru_cache
from typing import Optional, Dict, Any
import logging

from pydantic_settings import BaseSettings

# 设置日志记录器
logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """应用配置"""
    # 应用设置
    APP_NAME: str = "内容树服务"
    APP_DESCRIPTION: str = "内容管理后台的内容树数据服务"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # 数据库配置
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/content_tree.db"
    DATABASE_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # JWT认证配置
    SECRET_KEY: str = "supersecretkey"  # 生产环境应使用安全的密钥并通过环境变量配置
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7天

    # 本地化
    DEFAULT_LANGUAGE: str = "zh_CN"

    # 内容树
    # 可列出类型为空时是否返回空结果（默认不限制内容类型）
    CONTENT_TREE_RESTRICT_EMPTY_LISTABLE: bool = False

    class Config:
        """Pydantic配置"""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # 允许额外字段，避免验证错误

    @property
    def is_sqlite(self) -> bool:
        """是否使用SQLite数据库"""
        return self.DATABASE_URL.startswith("sqlite")

    def get_database_url(self) -> str:
        """获取数据库URL"""
        return self.DATABASE_URL

    def get_engine_params(self) -> Dict[str, Any]:
        """获取数据库引擎参数，基于当前配置"""
        params: Dict[str, Any] = {"echo": self.DATABASE_ECHO}

        if not self.is_sqlite:
            params.update({
                "pool_size": max(5, self.DB_POOL_SIZE),
                "max_overflow": max(10, self.DB_MAX_OVERFLOW),
                "pool_timeout": 30,
                "pool_pre_ping": True,
                "pool_recycle": 1800,
            })

        return params

@lru_cache()
def get_settings():
    """获取应用配置单例"""
    settings = Settings()
    logger.info(f"加载配置: 环境={settings.ENVIRONMENT}, 数据库={settings.DATABASE_URL.split('@')[-1]}")
    return settings
