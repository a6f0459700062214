"""ORM 模型导出集合。"""

from souldiary_api.models.diary import DiaryEntry
from souldiary_api.models.mood import MoodRecord
from souldiary_api.models.sticker import Sticker, UserSticker
from souldiary_api.models.user import User

__all__ = [
    "DiaryEntry",
    "MoodRecord",
    "Sticker",
    "User",
    "UserSticker",
]
