"""
内容树API路由
"""
from enum import Enum
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.constants import APIConstants, ContentTreeConstants
from ...core.context import RequestContext
from ...core.database import get_session
from ...core.logging import get_api_logger
from ...core.messages import MessageKeys, get_message
from ...domain.schemas.base import ApiResponse
from ...domain.schemas.content_tree import (
    CommonContentTreeParams, ContentItemResponse, ContentsOrder,
    ContentsStatusFilter, SortDirection, TreeNode
)
from ...services.tree_provider import provider_registry
# 导入以注册内容类型供应者
from ...services import content_tree as _content_tree  # noqa: F401
from ..deps import api_response, get_request_context

logger = get_api_logger()

router = APIRouter(prefix="/api/content-tree", tags=["content-tree"])

def _parse_option(enum_class: Type[Enum], value: Optional[str]) -> Optional[Enum]:
    """解析过滤/排序选项，无法识别的值返回None（由服务层使用默认值）"""
    if value is None:
        return None
    try:
        return enum_class(value.lower())
    except ValueError:
        logger.info(f"无法识别的{enum_class.__name__}值: {value}，使用默认值")
        return None

# 响应模型
class TreeNodeListResponse(ApiResponse[List[TreeNode]]):
    """树节点列表响应"""
    pass

class ContentItemListResponse(ApiResponse[List[ContentItemResponse]]):
    """内容项列表响应"""
    pass

@router.get("/providers", response_model=ApiResponse[List[str]])
async def list_providers():
    """
    获取已注册的树节点供应者ID
    """
    return api_response(data=provider_registry.ids())

@router.get("/providers/{provider_id}/children", response_model=TreeNodeListResponse)
async def get_children(
    provider_id: str,
    node_type: str = Query(ContentTreeConstants.ROOT_NODE_TYPE, description="节点类型"),
    node_id: str = Query("", description="节点ID"),
    session: AsyncSession = Depends(get_session),
    context: RequestContext = Depends(get_request_context)
):
    """
    获取子节点
    """
    provider = provider_registry.create(provider_id, session)
    nodes = await provider.get_children(node_type, node_id, context)
    return api_response(data=nodes, message=get_message(MessageKeys.SUCCESS, context.language))

@router.get("/providers/{provider_id}/nodes/{node_type}/{node_id}", response_model=ApiResponse[TreeNode])
async def get_node(
    provider_id: str,
    node_type: str,
    node_id: str,
    session: AsyncSession = Depends(get_session),
    context: RequestContext = Depends(get_request_context)
):
    """
    获取单个节点（供应者不支持时返回501）
    """
    provider = provider_registry.create(provider_id, session)
    try:
        node = provider.get(node_type, node_id)
    except NotImplementedError as e:
        logger.warning(f"供应者 {provider_id} 不支持获取单个节点: {str(e)}")
        raise HTTPException(
            status_code=APIConstants.HTTP_NOT_IMPLEMENTED,
            detail=get_message(MessageKeys.NOT_IMPLEMENTED, context.language)
        )
    return api_response(data=node)

@router.get("/content-items", response_model=ContentItemListResponse, name=ContentTreeConstants.CONTENT_ITEMS_ROUTE)
async def get_content_items(
    provider_id: str = Query(ContentTreeConstants.CONTENT_TYPES_NODE_TYPE, alias=ContentTreeConstants.PROVIDER_ID_PARAM),
    typename: Optional[str] = Query(None, alias="providerParams[typename]"),
    status: Optional[str] = Query(ContentsStatusFilter.LATEST.value, description="状态过滤"),
    owned_by_me: bool = Query(False, description="只显示我拥有的内容"),
    sort_by: Optional[str] = Query(ContentsOrder.MODIFIED.value, description="排序字段"),
    sort_direction: Optional[str] = Query(SortDirection.DESCENDING.value, description="排序方向"),
    session: AsyncSession = Depends(get_session),
    context: RequestContext = Depends(get_request_context)
):
    """
    获取内容项列表
    """
    provider = provider_registry.create(provider_id, session)
    common_params = CommonContentTreeParams(
        content_status_filter=_parse_option(ContentsStatusFilter, status),
        owned_by_me=owned_by_me,
        sort_by=_parse_option(ContentsOrder, sort_by),
        sort_direction=_parse_option(SortDirection, sort_direction) or SortDirection.DESCENDING
    )
    specific_params = {ContentTreeConstants.TYPENAME_PARAM: typename} if typename is not None else None

    items = await provider.get_content_items(specific_params, common_params, context)
    return api_response(
        data=[ContentItemResponse.model_validate(item) for item in items],
        message=get_message(MessageKeys.SUCCESS, context.language)
    )
