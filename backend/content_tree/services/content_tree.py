"""
内容树服务 - 内容类型树节点供应者与内容项查询
"""
from typing import Dict, List, Optional

from sqlalchemy import false
from sqlalchemy.ext.asyncio import AsyncSession

from .authorization import AuthorizationService
from .content_definition import ContentDefinitionManager
from .content_manager import ContentManager
from .tree_provider import TreeNodeProvider, register_tree_node_provider
from ..core.config import Settings, get_settings
from ..core.constants import ContentTreeConstants, Permissions
from ..core.context import RequestContext
from ..core.errors import ContentTypeNotFoundException
from ..core.logging import get_logger
from ..core.messages import MessageKeys, MessageManager, get_message_manager
from ..domain.models.content_item import ContentItem
from ..domain.schemas.content_tree import (
    CommonContentTreeParams, ContentTypeDefinition, ContentsOrder,
    ContentsStatusFilter, SortDirection, TreeNode
)
from ..repositories.content_item import ContentItemQuery, ContentItemRepository

logger = get_logger(__name__)

# 排序字段映射，未识别的排序字段按修改时间排序
SORT_COLUMNS = {
    ContentsOrder.MODIFIED: ContentItem.modified_utc,
    ContentsOrder.PUBLISHED: ContentItem.published_utc,
    ContentsOrder.CREATED: ContentItem.created_utc,
}


@register_tree_node_provider(ContentTreeConstants.CONTENT_TYPES_NODE_TYPE)
class ContentTreeNodeProvider(TreeNodeProvider):
    """内容类型树节点供应者

    根节点下只有一个“内容类型”分组节点，分组节点下是每个可创建的内容类型。
    """

    def __init__(
        self,
        session: AsyncSession,
        content_definition_manager: Optional[ContentDefinitionManager] = None,
        content_manager: Optional[ContentManager] = None,
        authorization_service: Optional[AuthorizationService] = None,
        content_item_repository: Optional[ContentItemRepository] = None,
        messages: Optional[MessageManager] = None,
        settings: Optional[Settings] = None
    ):
        self.content_definition_manager = content_definition_manager or ContentDefinitionManager(session)
        self.content_manager = content_manager or ContentManager()
        self.authorization_service = authorization_service or AuthorizationService(self.content_definition_manager)
        self.content_item_repository = content_item_repository or ContentItemRepository(session)
        self.messages = messages or get_message_manager()
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return self.messages.get(MessageKeys.CONTENT_TYPES)

    @property
    def id(self) -> str:
        return self.messages.get(MessageKeys.CONTENT_TYPES_ID)

    # === 树节点 ===

    async def get_children(self, node_type: str, node_id: str, context: RequestContext) -> List[TreeNode]:
        """获取子节点

        - root: 只返回“内容类型”分组节点
        - content-types: 每个可创建的内容类型一个叶子节点，按显示名称升序
        - 其他节点类型: 空列表
        """
        if node_type == ContentTreeConstants.ROOT_NODE_TYPE:
            return [self._get_content_types_node(context)]

        if node_type == ContentTreeConstants.CONTENT_TYPES_NODE_TYPE:
            definitions = await self.content_definition_manager.list_type_definitions()
            creatable = [ctd for ctd in definitions if ctd.settings.creatable]
            creatable.sort(key=lambda ctd: ctd.display_name)
            return [self._get_content_type_node(ctd, context) for ctd in creatable]

        return []

    def _get_content_types_node(self, context: RequestContext) -> TreeNode:
        """内容类型分组节点"""
        return TreeNode(
            title=self.messages.get(MessageKeys.CONTENT_TYPES, context.language),
            type=self.id,
            id=self.id
        )

    def _get_content_type_node(self, definition: ContentTypeDefinition, context: RequestContext) -> TreeNode:
        """单个内容类型的叶子节点"""
        url = None
        if context.url_helper is not None:
            url = context.url_helper.action(
                ContentTreeConstants.CONTENT_ITEMS_ROUTE,
                query={
                    ContentTreeConstants.PROVIDER_ID_PARAM: self.id,
                    f"{ContentTreeConstants.PROVIDER_PARAMS_PREFIX}[{ContentTreeConstants.TYPENAME_PARAM}]": definition.name,
                }
            )

        return TreeNode(
            title=definition.display_name,
            type=ContentTreeConstants.CONTENT_TYPE_NODE_TYPE,
            id=definition.name,
            is_leaf=True,
            url=url
        )

    def get(self, node_type: str, node_id: str) -> TreeNode:
        """内容类型供应者不支持按ID获取单个节点"""
        raise NotImplementedError("Get is not implemented: ContentTreeNodeProvider")

    # === 内容项 ===

    async def get_content_items(
        self,
        specific_params: Optional[Dict[str, Optional[str]]],
        common_params: Optional[CommonContentTreeParams],
        context: RequestContext
    ) -> List[ContentItem]:
        """获取内容项

        指定 typename 时只查询该类型（类型不存在时抛出 ContentTypeNotFoundException），
        否则查询当前用户可列出的类型；可列出类型为空时不限制类型。
        """
        query = self.content_item_repository.query()

        type_name = (specific_params or {}).get(ContentTreeConstants.TYPENAME_PARAM)
        if type_name is not None:
            content_type_definition = await self.content_definition_manager.get_type_definition(type_name)
            if content_type_definition is None:
                raise ContentTypeNotFoundException(type_name)

            query = query.where(ContentItem.content_type == type_name)
        else:
            listable_types = [t.name for t in await self.get_listable_types(context)]
            if listable_types:
                query = query.where(ContentItem.content_type.in_(listable_types))
            elif self.settings.CONTENT_TREE_RESTRICT_EMPTY_LISTABLE:
                logger.info("没有可列出的内容类型，返回空结果")
                return []

        query = self.apply_common_parameters(query, common_params, context)

        items = await query.list()
        logger.info(f"内容项查询完成: 类型={type_name or '*'}, 用户={context.username}, 数量={len(items)}")
        return items

    def apply_common_parameters(
        self,
        query: ContentItemQuery,
        common_params: Optional[CommonContentTreeParams],
        context: RequestContext
    ) -> ContentItemQuery:
        """按固定顺序应用状态过滤、所有者过滤和排序"""
        if query is None:
            raise ValueError("query不能为空")

        if common_params is None:
            return query

        status = common_params.content_status_filter
        if status == ContentsStatusFilter.PUBLISHED:
            query = query.where(ContentItem.published.is_(True))
        elif status == ContentsStatusFilter.DRAFT:
            query = query.where(ContentItem.latest.is_(True), ContentItem.published.is_(False))
        else:
            query = query.where(ContentItem.latest.is_(True))

        if common_params.owned_by_me:
            username = context.username
            if username:
                query = query.where(ContentItem.owner == username)
            else:
                # 匿名用户没有自己的内容
                query = query.where(false())

        column = SORT_COLUMNS.get(common_params.sort_by, ContentItem.modified_utc)
        if common_params.sort_direction == SortDirection.ASCENDING:
            query = query.order_by(column)
        else:
            query = query.order_by_descending(column)

        return query

    async def get_listable_types(self, context: RequestContext) -> List[ContentTypeDefinition]:
        """获取当前用户可列出的内容类型（按注册顺序，逐个检查编辑权限）"""
        listable: List[ContentTypeDefinition] = []

        user = context.user
        if user is None:
            return listable

        for ctd in await self.content_definition_manager.list_type_definitions():
            if not ctd.settings.listable:
                continue

            authorized = await self.authorization_service.authorize(
                user, Permissions.EDIT_CONTENT, self.content_manager.new(ctd.name)
            )
            if authorized:
                listable.append(ctd)

        return listable
