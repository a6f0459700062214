"""服务层能力导出集合。"""

from souldiary_api.services.credentials import CredentialStore, hash_password, verify_password
from souldiary_api.services.diaries import add_diary, delete_diary, get_diary, list_diaries, update_diary
from souldiary_api.services.moods import get_mood, get_mood_range, set_mood
from souldiary_api.services.ownership import delete_owned, get_owned, list_owned, owned_by, update_owned
from souldiary_api.services.stickers import (
    add_sticker_to_calendar,
    buy_sticker,
    ensure_sticker_owned,
    list_catalog,
    list_user_stickers,
)

__all__ = [
    "CredentialStore",
    "hash_password",
    "verify_password",
    "owned_by",
    "list_owned",
    "get_owned",
    "update_owned",
    "delete_owned",
    "add_diary",
    "list_diaries",
    "get_diary",
    "update_diary",
    "delete_diary",
    "set_mood",
    "get_mood",
    "get_mood_range",
    "list_catalog",
    "list_user_stickers",
    "ensure_sticker_owned",
    "buy_sticker",
    "add_sticker_to_calendar",
]
