"""
Repository基类 - 提供统一的数据访问接口
"""
import json
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TypeVar, Generic, Type, Union
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from .logging import get_logger

T = TypeVar('T')

class BaseRepository(Generic[T], ABC):
    """Repository基类

    会话由调用者（每个请求一个）提供，事务提交由会话的拥有者负责。
    """

    def __init__(self, model_class: Type[T], session: AsyncSession):
        self.model_class = model_class
        self._session = session
        self.logger = get_logger(self.__class__.__name__)

    @property
    def session(self) -> AsyncSession:
        """获取数据库会话"""
        return self._session

    def _prepare_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """准备数据用于数据库操作"""
        prepared = {}
        for key, value in data.items():
            if key in self._get_json_fields() and isinstance(value, (dict, list)):
                prepared[key] = json.dumps(value, ensure_ascii=False)
            elif isinstance(value, Enum):
                prepared[key] = value.value
            elif value is not None:
                prepared[key] = value
        return prepared

    def _load_json(self, value: Optional[str]) -> Any:
        """解析JSON字段，无效内容返回空字典"""
        if not value:
            return {}
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            self.logger.warning(f"JSON字段解析失败: {value!r}")
            return {}

    def _get_json_fields(self) -> List[str]:
        """获取需要JSON序列化的字段列表"""
        # 子类可以重写此方法来指定JSON字段
        return []

    # === 基础CRUD操作 ===

    async def create(self, data: Union[Dict[str, Any], T]) -> T:
        """创建实体"""
        if isinstance(data, dict):
            if 'id' not in data or not data['id']:
                data['id'] = str(uuid.uuid4())
            entity = self.model_class(**self._prepare_data(data))
        else:
            entity = data
            if not entity.id:
                entity.id = str(uuid.uuid4())

        self._session.add(entity)
        await self._session.flush()
        return entity

    async def count(self, **filters) -> int:
        """统计实体数量"""
        stmt = select(func.count(self.model_class.id))

        # 应用过滤条件
        for key, value in filters.items():
            if hasattr(self.model_class, key):
                stmt = stmt.where(getattr(self.model_class, key) == value)

        result = await self._session.execute(stmt)
        return result.scalar() or 0

    # === 查询操作 ===

    async def find_by(self, **filters) -> List[T]:
        """根据条件查找实体"""
        stmt = select(self.model_class)

        for key, value in filters.items():
            if hasattr(self.model_class, key):
                if isinstance(value, list):
                    stmt = stmt.where(getattr(self.model_class, key).in_(value))
                else:
                    stmt = stmt.where(getattr(self.model_class, key) == value)

        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # === 抽象方法 ===

    @abstractmethod
    def get_table_name(self) -> str:
        """获取表名"""
        pass
