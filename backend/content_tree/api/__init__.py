"""
API包 - 提供所有API路由
"""
from fastapi import APIRouter

from .routes.content_tree import router as content_tree_router

# 主路由
api_router = APIRouter()
api_router.include_router(content_tree_router)

# 健康检查路由
@api_router.get("/api/health")
async def api_health():
    """API健康检查"""
    return {"status": "ok", "message": "API正常运行"}

__all__ = ["api_router"]
