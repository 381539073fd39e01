"""
API中间件模块

提供请求日志、安全头等中间件功能。
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging import StructuredLogger

structured_logger = StructuredLogger("api")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """请求日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """处理请求并记录日志"""
        # 生成请求ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        structured_logger.log_request(
            method=request.method,
            path=str(request.url.path),
            request_id=request_id,
            query_params=dict(request.query_params),
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            structured_logger.log_error(
                error=e,
                context={
                    "request_id": request_id,
                    "method": request.method,
                    "path": str(request.url.path),
                    "duration": time.time() - start_time,
                }
            )
            raise

        duration = time.time() - start_time
        structured_logger.log_response(
            status_code=response.status_code,
            duration=duration,
            request_id=request_id,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """安全头中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """添加安全头"""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
