"""心情日历服务。

同一用户同一天仅保留一条记录，写入通过数据库 upsert 一次完成，
不采用“先查后写”的两步流程。
"""

import datetime as dt
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from souldiary_api.core.errors import BackendFailure, NotFoundOrForbidden
from souldiary_api.core.security import IdentityClaims
from souldiary_api.models.mood import MoodRecord
from souldiary_api.services.ownership import get_owned, owned_by
from souldiary_api.services.stickers import ensure_sticker_owned

MOOD_NOT_FOUND = "Mood color not found for this date."
MOOD_RANGE_NOT_FOUND = "No mood colors found for the given range."


def _upsert_statement(db: Session, values: dict[str, Any], update_columns: list[str]):
    """按数据库方言构造 upsert 语句，冲突键为 (user_id, date)。"""
    dialect = db.get_bind().dialect.name
    if dialect == "mysql":
        stmt = mysql.insert(MoodRecord).values(**values)
        return stmt.on_duplicate_key_update({column: stmt.inserted[column] for column in update_columns})

    if dialect == "postgresql":
        stmt = postgresql.insert(MoodRecord).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(MoodRecord).values(**values)
    else:
        raise BackendFailure(f"Server error: upsert is not supported for dialect {dialect}.")
    return stmt.on_conflict_do_update(
        index_elements=[MoodRecord.user_id, MoodRecord.date],
        set_={column: stmt.excluded[column] for column in update_columns},
    )


def set_mood(
    db: Session,
    *,
    identity: IdentityClaims,
    date: dt.date,
    color: str,
    sticker_id: int | None = None,
) -> None:
    """设置当天心情颜色，已存在则覆盖。

    未传贴纸时保留当天已有贴纸，仅覆盖颜色。
    """
    values: dict[str, Any] = {"user_id": identity.user_id, "date": date, "color": color}
    update_columns = ["color"]
    if sticker_id is not None:
        ensure_sticker_owned(db, identity=identity, sticker_id=sticker_id)
        values["sticker_id"] = sticker_id
        update_columns.append("sticker_id")

    db.execute(_upsert_statement(db, values, update_columns))
    db.commit()


def get_mood(db: Session, *, identity: IdentityClaims, date: dt.date) -> MoodRecord:
    return get_owned(db, MoodRecord, identity, MoodRecord.date == date, message=MOOD_NOT_FOUND)


def get_mood_range(
    db: Session,
    *,
    identity: IdentityClaims,
    start_date: dt.date,
    end_date: dt.date,
) -> list[MoodRecord]:
    """查询闭区间内的心情记录，区间内无记录时返回 404。"""
    stmt = (
        owned_by(select(MoodRecord), MoodRecord, identity)
        .where(MoodRecord.date.between(start_date, end_date))
        .order_by(MoodRecord.date)
    )
    moods = list(db.execute(stmt).scalars().all())
    if not moods:
        raise NotFoundOrForbidden(MOOD_RANGE_NOT_FOUND)
    return moods
