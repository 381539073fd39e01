"""
应用常量配置 - 统一管理所有魔法数字和硬编码值
"""
from typing import Dict

class APIConstants:
    """API相关常量"""
    # HTTP状态码
    HTTP_OK = 200
    HTTP_BAD_REQUEST = 400
    HTTP_UNAUTHORIZED = 401
    HTTP_FORBIDDEN = 403
    HTTP_NOT_FOUND = 404
    HTTP_INTERNAL_ERROR = 500
    HTTP_NOT_IMPLEMENTED = 501

    # CORS配置
    CORS_MAX_AGE = 86400  # 24小时

class ContentTreeConstants:
    """内容树相关常量"""
    # 节点类型
    ROOT_NODE_TYPE = "root"
    CONTENT_TYPES_NODE_TYPE = "content-types"
    CONTENT_TYPE_NODE_TYPE = "content-type"

    # 供应者参数
    TYPENAME_PARAM = "typename"
    PROVIDER_ID_PARAM = "providerId"
    PROVIDER_PARAMS_PREFIX = "providerParams"

    # 内容项列表路由名称
    CONTENT_ITEMS_ROUTE = "get_content_items"

class Permissions:
    """内容权限名称"""
    EDIT_CONTENT = "edit_content"
    EDIT_OWN_CONTENT = "edit_own_content"
    VIEW_CONTENT = "view_content"

    @staticmethod
    def for_type(permission: str, content_type: str) -> str:
        """获取内容类型专属权限名称（用于可保护的内容类型）"""
        return f"{permission}:{content_type}"

# 角色默认权限，管理员拥有全部权限不在此列出
ROLE_PERMISSIONS: Dict[str, tuple] = {
    "editor": (Permissions.EDIT_CONTENT, Permissions.VIEW_CONTENT),
    "author": (Permissions.EDIT_OWN_CONTENT, Permissions.VIEW_CONTENT),
    "user": (Permissions.VIEW_CONTENT,),
}

class DatabaseConstants:
    """数据库相关常量"""
    # 字段长度限制
    USERNAME_MAX_LENGTH = 100
    EMAIL_MAX_LENGTH = 255
    FULL_NAME_MAX_LENGTH = 255
    ROLE_MAX_LENGTH = 50

    # 内容字段长度
    CONTENT_TYPE_NAME_MAX_LENGTH = 255
    CONTENT_ITEM_ID_MAX_LENGTH = 26
    DISPLAY_TEXT_MAX_LENGTH = 255

class LoggingConstants:
    """日志相关常量"""
    # 日志文件配置
    MAX_LOG_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5

    # 日志格式
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

class ServerConstants:
    """服务器相关常量"""
    # 默认端口
    DEFAULT_PORT = 8000

    # 环境配置
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

