"""
内容树相关的数据模型
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseSchema


class ContentsStatusFilter(str, Enum):
    """内容状态过滤"""
    LATEST = "latest"
    PUBLISHED = "published"
    DRAFT = "draft"
    ALL_VERSIONS = "all_versions"


class ContentsOrder(str, Enum):
    """内容排序字段"""
    MODIFIED = "modified"
    PUBLISHED = "published"
    CREATED = "created"


class SortDirection(str, Enum):
    """排序方向"""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class ContentTypeSettings(BaseModel):
    """内容类型设置"""
    model_config = ConfigDict(extra="ignore", frozen=True)

    creatable: bool = Field(default=False, description="是否可在后台创建")
    listable: bool = Field(default=False, description="是否在内容列表中显示")
    draftable: bool = Field(default=False, description="是否支持草稿")
    versionable: bool = Field(default=False, description="是否保留版本")
    securable: bool = Field(default=False, description="是否启用类型专属权限")


class ContentTypeDefinition(BaseModel):
    """内容类型定义（只读）"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="类型名称")
    display_name: str = Field(..., description="显示名称")
    settings: ContentTypeSettings = Field(default_factory=ContentTypeSettings, description="类型设置")


class TreeNode(BaseSchema):
    """树节点"""
    title: str = Field(..., description="显示标题")
    type: str = Field(..., description="节点类型")
    id: str = Field(..., description="节点ID")
    is_leaf: bool = Field(default=False, description="是否为叶子节点")
    url: Optional[str] = Field(default=None, description="节点链接")


class CommonContentTreeParams(BaseModel):
    """通用内容树过滤参数"""
    content_status_filter: Optional[ContentsStatusFilter] = Field(default=ContentsStatusFilter.LATEST, description="状态过滤")
    owned_by_me: bool = Field(default=False, description="只显示我拥有的内容")
    sort_by: Optional[ContentsOrder] = Field(default=ContentsOrder.MODIFIED, description="排序字段")
    sort_direction: SortDirection = Field(default=SortDirection.DESCENDING, description="排序方向")


class ContentItemResponse(BaseSchema):
    """内容项响应模型"""
    content_item_id: str = Field(..., description="内容项ID")
    content_item_version_id: str = Field(..., description="版本ID")
    content_type: str = Field(..., description="内容类型")
    display_text: Optional[str] = Field(default=None, description="显示文本")
    published: bool = Field(default=False, description="是否已发布")
    latest: bool = Field(default=False, description="是否最新版本")
    owner: Optional[str] = Field(default=None, description="所有者")
    author: Optional[str] = Field(default=None, description="作者")
    modified_utc: Optional[datetime] = Field(default=None, description="修改时间")
    published_utc: Optional[datetime] = Field(default=None, description="发布时间")
    created_utc: Optional[datetime] = Field(default=None, description="创建时间")

    model_config = ConfigDict(from_attributes=True)
