"""
消息管理模块 - 统一管理所有用户可见的消息，支持国际化
"""
import json
import os
from typing import Dict, Optional
from enum import Enum

from .logging import get_logger

logger = get_logger(__name__)

MESSAGES_DIR = os.path.join(os.path.dirname(__file__), "..", "config", "messages")

class Language(str, Enum):
    """支持的语言"""
    ZH_CN = "zh_CN"
    EN_US = "en_US"

    @classmethod
    def parse(cls, value: Optional[str], default: "Language") -> "Language":
        """解析语言代码（支持 zh-CN / en_US 等写法），无法识别时返回默认语言"""
        if not value:
            return default
        normalized = value.replace("-", "_").split(",")[0].split(";")[0].strip().lower()
        for language in cls:
            if language.value.lower() == normalized or language.value.split("_")[0].lower() == normalized:
                return language
        return default

class MessageManager:
    """消息管理器"""

    def __init__(self, default_language: Language = Language.ZH_CN, messages_dir: str = MESSAGES_DIR):
        self.default_language = default_language
        self.messages_dir = messages_dir
        self.messages: Dict[str, Dict[str, str]] = {}
        self._load_messages()

    def _load_messages(self):
        """加载消息文件"""
        for language in Language:
            message_file = os.path.join(self.messages_dir, f"{language.value}.json")
            if not os.path.exists(message_file):
                logger.warning(f"消息文件不存在: {message_file}")
                self.messages[language.value] = {}
                continue
            try:
                with open(message_file, 'r', encoding='utf-8') as f:
                    self.messages[language.value] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"加载消息文件失败 {message_file}: {str(e)}")
                self.messages[language.value] = {}

    def get(self, key: str, language: Optional[Language] = None, **kwargs) -> str:
        """获取消息"""
        lang = language or self.default_language

        # 处理嵌套键（如 "common.success"）
        def get_nested_value(data: dict, key_path: str):
            value = data
            for k in key_path.split('.'):
                if isinstance(value, dict) and k in value:
                    value = value[k]
                else:
                    return None
            return value

        # 尝试获取指定语言的消息
        message = get_nested_value(self.messages.get(lang.value, {}), key)

        # 如果没有找到，尝试默认语言
        if not message and lang != self.default_language:
            message = get_nested_value(self.messages.get(self.default_language.value, {}), key)

        # 如果还是没有找到，返回key本身
        if not message:
            logger.warning(f"消息键未找到: {key}")
            return key

        # 格式化消息
        try:
            return message.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.error(f"消息格式化失败 {key}: {str(e)}")
            return message

# 全局消息管理器实例
_message_manager = None

def get_message_manager() -> MessageManager:
    """获取全局消息管理器实例"""
    global _message_manager
    if _message_manager is None:
        from .config import get_settings
        default_language = Language.parse(get_settings().DEFAULT_LANGUAGE, Language.ZH_CN)
        _message_manager = MessageManager(default_language)
    return _message_manager

def get_message(key: str, language: Optional[Language] = None, **kwargs) -> str:
    """获取消息的便捷函数"""
    return get_message_manager().get(key, language, **kwargs)

# 常用消息键常量
class MessageKeys:
    """消息键常量"""

    # 通用消息
    SUCCESS = "common.success"
    NOT_IMPLEMENTED = "common.not_implemented"

    # 内容树相关
    CONTENT_TYPES = "content_tree.content_types"
    CONTENT_TYPES_ID = "content_tree.content_types_id"
