"""路由模块导出集合。"""

from . import auth, diaries, health, moods, stickers, users

__all__ = [
    "auth",
    "diaries",
    "health",
    "moods",
    "stickers",
    "users",
]
