"""
URL生成工具 - 根据路由名称生成后台操作链接
"""
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from fastapi import Request


class UrlHelper:
    """URL生成器

    url_path_for 与 Starlette 的 ``app.url_path_for`` 签名一致。
    """

    def __init__(self, url_path_for: Callable[..., Any], root_path: str = ""):
        self._url_path_for = url_path_for
        self.root_path = root_path.rstrip("/")

    @classmethod
    def from_request(cls, request: Request) -> "UrlHelper":
        """根据当前请求创建URL生成器"""
        return cls(request.app.url_path_for, request.scope.get("root_path", ""))

    def action(self, route_name: str, query: Optional[Dict[str, Any]] = None, **path_params) -> str:
        """生成指定路由的相对链接，query 中的值为 None 时忽略"""
        path = f"{self.root_path}{self._url_path_for(route_name, **path_params)}"
        query = {key: value for key, value in (query or {}).items() if value is not None}
        if not query:
            return path
        return f"{path}?{urlencode(query)}"
