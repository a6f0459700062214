"""贴纸目录、购买与日历贴纸服务。"""

import datetime as dt
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from souldiary_api.core.errors import AlreadyOwned, NotFoundOrForbidden
from souldiary_api.core.security import IdentityClaims
from souldiary_api.models.mood import MoodRecord
from souldiary_api.models.sticker import Sticker, UserSticker
from souldiary_api.services.ownership import owned_by, update_owned

logger = logging.getLogger(__name__)

STICKER_NOT_FOUND = "Sticker not found."
STICKER_NOT_OWNED = "Sticker not found or you do not own it."


def list_catalog(db: Session) -> list[Sticker]:
    return list(db.execute(select(Sticker).order_by(Sticker.sticker_id)).scalars().all())


def list_user_stickers(db: Session, *, identity: IdentityClaims) -> list[Sticker]:
    """列出当前用户已拥有的贴纸。"""
    stmt = (
        owned_by(select(Sticker).join(UserSticker, UserSticker.sticker_id == Sticker.sticker_id), UserSticker, identity)
        .order_by(Sticker.sticker_id)
    )
    return list(db.execute(stmt).scalars().all())


def is_sticker_owned(db: Session, *, identity: IdentityClaims, sticker_id: int) -> bool:
    stmt = owned_by(select(UserSticker.id), UserSticker, identity).where(UserSticker.sticker_id == sticker_id)
    return db.execute(stmt).first() is not None


def ensure_sticker_owned(db: Session, *, identity: IdentityClaims, sticker_id: int) -> None:
    if not is_sticker_owned(db, identity=identity, sticker_id=sticker_id):
        raise NotFoundOrForbidden(STICKER_NOT_OWNED)


def buy_sticker(db: Session, *, identity: IdentityClaims, sticker_id: int) -> UserSticker:
    """购买贴纸。

    判定规则：
    1. 贴纸必须存在于目录中。
    2. 已持有时拒绝重复购买；预检查仅用于给出友好提示，
       (user_id, sticker_id) 唯一约束才是并发下的最终裁决。
    """
    if db.get(Sticker, sticker_id) is None:
        raise NotFoundOrForbidden(STICKER_NOT_FOUND)
    if is_sticker_owned(db, identity=identity, sticker_id=sticker_id):
        raise AlreadyOwned()

    owned = UserSticker(user_id=identity.user_id, sticker_id=sticker_id)
    db.add(owned)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AlreadyOwned() from exc
    logger.info("sticker purchased user_id=%s sticker_id=%s", identity.user_id, sticker_id)
    return owned


def add_sticker_to_calendar(db: Session, *, identity: IdentityClaims, date: dt.date, sticker_id: int) -> None:
    """把已拥有的贴纸贴到当天的心情记录上，当天无记录时返回 404。"""
    ensure_sticker_owned(db, identity=identity, sticker_id=sticker_id)
    update_owned(
        db,
        MoodRecord,
        identity,
        MoodRecord.date == date,
        values={"sticker_id": sticker_id},
        message="Mood record not found for this date.",
    )
