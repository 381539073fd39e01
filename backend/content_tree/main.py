"""
应用入口 - 创建并配置FastAPI应用
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .core.errors import register_exception_handlers
from .core.config import get_settings
from .core.constants import ServerConstants
from .core.database import db_manager
from .core.logging import setup_logging, get_logger
from .api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

# 导入模型以注册数据表
from .domain import models  # noqa: F401

@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logging()
    logger = get_logger("main")
    logger.info("应用启动中...")

    await db_manager.create_tables()
    logger.info("应用启动完成")

    yield

    logger.info("应用关闭中...")
    await db_manager.dispose()

def create_app() -> FastAPI:
    """创建FastAPI应用"""
    settings = get_settings()
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.DEBUG
    )

    # 添加中间件
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 生产环境中应限制来源
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册错误处理器
    register_exception_handlers(app)

    # 包含API路由
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app

app = create_app()

# 本地启动代码
if __name__ == "__main__":
    import uvicorn
    import os

    port = int(os.getenv("PORT", str(ServerConstants.DEFAULT_PORT)))
    uvicorn.run(
        "content_tree.main:app",
        host="0.0.0.0",
        port=port,
        reload=True  # 开发模式下启用热重载
    )
