"""FastAPI 应用入口点。"""

from fastapi import FastAPI

from souldiary_api.core.config import get_settings
from souldiary_api.core.logging import setup_logging
from souldiary_api.exceptions import register_exception_handlers
from souldiary_api.middlewares import register_middlewares
from souldiary_api.api.router import api_router

settings = get_settings()


def create_app() -> FastAPI:
    """创建并配置 FastAPI 应用实例。"""
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        debug=settings.app_debug,
        description=(
            "个人日记服务接口。\n\n"
            "所有接口统一返回平铺结构：`{isSuccess, message, ...}`。\n"
            "除注册、登录与健康检查外，均需携带 `Authorization: Bearer <token>`。\n"
            "日记、心情与贴纸数据只对其所属用户可见。"
        ),
        openapi_tags=[
            {"name": "health", "description": "服务存活与就绪探针。"},
            {"name": "auth", "description": "注册、登录与修改口令。"},
            {"name": "users", "description": "当前用户资料。"},
            {"name": "diaries", "description": "日记新增、查询、更新与删除。"},
            {"name": "moods", "description": "按日期记录的心情颜色。"},
            {"name": "stickers", "description": "贴纸目录、购买与日历贴纸。"},
        ],
    )

    register_middlewares(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
