"""顶层路由注册。"""

from fastapi import APIRouter

from . import auth, diaries, health, moods, stickers, users

api_router = APIRouter()

# 注册顺序即在线文档中的分组顺序。
for module in (health, auth, users, diaries, moods, stickers):
    api_router.include_router(module.router)
