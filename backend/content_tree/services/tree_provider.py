"""
树节点供应者基类与注册表
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.context import RequestContext
from ..core.errors import TreeNodeProviderNotFoundException
from ..domain.models.content_item import ContentItem
from ..domain.schemas.content_tree import CommonContentTreeParams, TreeNode


class TreeNodeProvider(ABC):
    """树节点供应者"""

    @property
    @abstractmethod
    def name(self) -> str:
        """供应者显示名称"""
        pass

    @property
    @abstractmethod
    def id(self) -> str:
        """供应者ID"""
        pass

    @abstractmethod
    async def get_children(self, node_type: str, node_id: str, context: RequestContext) -> List[TreeNode]:
        """获取子节点"""
        pass

    @abstractmethod
    def get(self, node_type: str, node_id: str) -> TreeNode:
        """获取单个节点"""
        pass

    @abstractmethod
    async def get_content_items(
        self,
        specific_params: Optional[Dict[str, Optional[str]]],
        common_params: Optional[CommonContentTreeParams],
        context: RequestContext
    ) -> List[ContentItem]:
        """获取节点链接对应的内容项"""
        pass


class TreeNodeProviderRegistry:
    """树节点供应者注册表"""

    def __init__(self):
        self._providers: Dict[str, Type[TreeNodeProvider]] = {}

    def register(self, provider_id: str, provider_class: Type[TreeNodeProvider]) -> None:
        """注册供应者"""
        self._providers[provider_id] = provider_class

    def get(self, provider_id: str) -> Type[TreeNodeProvider]:
        """获取供应者类"""
        provider_class = self._providers.get(provider_id)
        if provider_class is None:
            raise TreeNodeProviderNotFoundException(provider_id)
        return provider_class

    def create(self, provider_id: str, session: AsyncSession) -> TreeNodeProvider:
        """创建绑定到当前会话的供应者实例"""
        return self.get(provider_id)(session)

    def ids(self) -> List[str]:
        """获取所有已注册的供应者ID"""
        return list(self._providers)


# 全局供应者注册表
provider_registry = TreeNodeProviderRegistry()


def register_tree_node_provider(provider_id: str) -> Callable[[Type[TreeNodeProvider]], Type[TreeNodeProvider]]:
    """供应者注册装饰器"""
    def decorator(provider_class):
        provider_registry.register(provider_id, provider_class)
        return provider_class
    return decorator
