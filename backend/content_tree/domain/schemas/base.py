"""
基础数据模型 - 提供通用的数据验证模型
"""
from datetime import datetime
from typing import TypeVar, Generic, Optional, Any, Dict
from pydantic import BaseModel, Field, ConfigDict

# 泛型类型T，用于数据响应
T = TypeVar('T')

class BaseSchema(BaseModel):
    """基础Schema类"""
    model_config = ConfigDict(
        # 允许使用字段别名
        populate_by_name=True,
        # 验证赋值
        validate_assignment=True,
        # 使用枚举值
        use_enum_values=True,
    )

class ApiResponse(BaseSchema, Generic[T]):
    """标准API响应模型"""
    success: bool = Field(True, description="操作是否成功")
    code: int = Field(200, description="HTTP状态码")
    message: str = Field("操作成功", description="响应消息")
    data: Optional[T] = Field(None, description="响应数据")
    timestamp: datetime = Field(default_factory=datetime.now, description="响应时间")
    request_id: Optional[str] = Field(None, description="请求ID")

class ErrorResponse(BaseSchema):
    """错误响应模型"""
    success: bool = Field(False, description="操作是否成功")
    code: int = Field(..., description="错误状态码")
    message: str = Field(..., description="错误消息")
    details: Optional[Dict[str, Any]] = Field(None, description="错误详情")
    timestamp: datetime = Field(default_factory=datetime.now, description="响应时间")
    path: Optional[str] = Field(None, description="请求路径")
