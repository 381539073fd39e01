"""
日志管理系统

提供统一的日志配置、结构化日志、敏感信息脱敏等功能。
"""
import logging
import logging.config
import sys
import json
import re
import traceback
from pathlib import Path
from typing import Dict, Any
from datetime import datetime

from .config import get_settings
from .constants import LoggingConstants

ROOT_LOGGER_NAME = "content_tree"


class SensitiveDataFilter(logging.Filter):
    """敏感信息过滤器"""

    SENSITIVE_PATTERNS = [
        (re.compile(r'password["\']?\s*[:=]\s*["\']?([^"\'}\s,]+)', re.IGNORECASE), 'password'),
        (re.compile(r'token["\']?\s*[:=]\s*["\']?([^"\'}\s,]+)', re.IGNORECASE), 'token'),
        (re.compile(r'secret["\']?\s*[:=]\s*["\']?([^"\'}\s,]+)', re.IGNORECASE), 'secret'),
        (re.compile(r'authorization:\s*bearer\s+([^\s]+)', re.IGNORECASE), 'auth_token'),
    ]

    def filter(self, record):
        """过滤敏感信息"""
        if hasattr(record, 'msg'):
            record.msg = self._mask_sensitive_data(str(record.msg))

        if hasattr(record, 'args') and record.args:
            record.args = tuple(
                self._mask_sensitive_data(str(arg)) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True

    def _mask_sensitive_data(self, text: str) -> str:
        """脱敏敏感数据"""
        for pattern, field_type in self.SENSITIVE_PATTERNS:
            text = pattern.sub(lambda m: f'{field_type}=***masked***', text)
        return text


class StructuredFormatter(logging.Formatter):
    """结构化日志格式化器"""

    def format(self, record):
        """格式化日志记录"""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # 添加额外的结构化数据
        if hasattr(record, 'extra_data'):
            log_entry.update(record.extra_data)

        # 添加异常信息
        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        # 添加请求上下文（如果存在）
        for attr in ['request_id', 'user_id']:
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def get_logging_config() -> Dict[str, Any]:
    """获取日志配置"""
    settings = get_settings()
    log_level = settings.LOG_LEVEL.upper()
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LoggingConstants.LOG_FORMAT,
                "datefmt": LoggingConstants.LOG_DATE_FORMAT,
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s",
                "datefmt": LoggingConstants.LOG_DATE_FORMAT,
            },
            "structured": {
                "()": StructuredFormatter,
            },
        },
        "filters": {
            "sensitive_filter": {
                "()": SensitiveDataFilter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "default",
                "stream": sys.stdout,
                "filters": ["sensitive_filter"],
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "detailed",
                "filename": log_dir / "content_tree.log",
                "maxBytes": LoggingConstants.MAX_LOG_FILE_SIZE,
                "backupCount": LoggingConstants.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
                "filters": ["sensitive_filter"],
            },
            "error_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "ERROR",
                "formatter": "detailed",
                "filename": log_dir / "error.log",
                "maxBytes": LoggingConstants.MAX_LOG_FILE_SIZE,
                "backupCount": LoggingConstants.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
                "filters": ["sensitive_filter"],
            },
            "structured_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "structured",
                "filename": log_dir / "structured.log",
                "maxBytes": LoggingConstants.MAX_LOG_FILE_SIZE,
                "backupCount": LoggingConstants.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
                "filters": ["sensitive_filter"],
            },
        },
        "loggers": {
            ROOT_LOGGER_NAME: {
                "level": log_level,
                "handlers": ["console", "file", "error_file", "structured_file"],
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
    }

    # 生产环境配置调整
    if settings.ENVIRONMENT == "production":
        config["handlers"]["console"]["formatter"] = "structured"
        config["loggers"]["uvicorn.access"]["level"] = "WARNING"
        config["loggers"]["sqlalchemy.engine"]["level"] = "ERROR"

    return config


def setup_logging() -> None:
    """设置日志配置"""
    settings = get_settings()
    config = get_logging_config()
    logging.config.dictConfig(config)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.info(f"日志系统初始化完成 - 环境: {settings.ENVIRONMENT}, 级别: {settings.LOG_LEVEL}")


def get_logger(name: str) -> logging.Logger:
    """获取指定名称的logger"""
    if name.startswith(f"{ROOT_LOGGER_NAME}.") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_api_logger() -> logging.Logger:
    """获取API层logger"""
    return get_logger("api")


class StructuredLogger:
    """结构化日志记录器"""

    def __init__(self, name: str):
        self.logger = get_logger(name)

    def log_with_context(self, level: int, message: str, **context) -> None:
        """带上下文的日志记录"""
        extra_data = {
            'event_type': context.pop('event_type', 'general'),
            **context
        }
        self.logger.log(level, message, extra={'extra_data': extra_data})

    def log_request(self, method: str, path: str, user_id: str = None, **kwargs) -> None:
        """记录请求日志"""
        self.log_with_context(
            logging.INFO,
            f"请求开始: {method} {path}",
            event_type="request_start",
            http_method=method,
            path=path,
            user_id=user_id,
            **kwargs
        )

    def log_response(self, status_code: int, duration: float, **kwargs) -> None:
        """记录响应日志"""
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        self.log_with_context(
            level,
            f"请求完成: {status_code} - 耗时: {duration*1000:.1f}ms",
            event_type="request_end",
            status_code=status_code,
            duration_ms=duration * 1000,
            **kwargs
        )

    def log_error(self, error: Exception, context: Dict[str, Any] = None, **kwargs) -> None:
        """记录错误日志"""
        error_context = {
            'event_type': 'error',
            'error_type': type(error).__name__,
            'error_message': str(error),
            **(context or {}),
            **kwargs
        }

        self.logger.error(
            f"错误发生: {type(error).__name__}: {str(error)}",
            exc_info=True,
            extra={'extra_data': error_context}
        )
