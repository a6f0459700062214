"""日记读写服务。"""

import datetime as dt
from typing import Any

from sqlalchemy.orm import Session

from souldiary_api.core.security import IdentityClaims
from souldiary_api.models.diary import DiaryEntry
from souldiary_api.services.ownership import delete_owned, get_owned, list_owned, update_owned

DIARY_NOT_FOUND = "Diary not found or you are not authorized to access it."


def add_diary(
    db: Session,
    *,
    identity: IdentityClaims,
    date: dt.date,
    title: str,
    content: str,
    one: str | None = None,
) -> DiaryEntry:
    """新增日记，作者强制为当前认证用户。"""
    entry = DiaryEntry(user_id=identity.user_id, date=date, title=title, content=content, one=one)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_diaries(db: Session, *, identity: IdentityClaims) -> list[DiaryEntry]:
    return list_owned(db, DiaryEntry, identity, DiaryEntry.date, DiaryEntry.id)


def get_diary(db: Session, *, identity: IdentityClaims, diary_id: int) -> DiaryEntry:
    return get_owned(db, DiaryEntry, identity, DiaryEntry.id == diary_id, message=DIARY_NOT_FOUND)


def update_diary(db: Session, *, identity: IdentityClaims, diary_id: int, changes: dict[str, Any]) -> None:
    """部分更新日记，仅允许修改正文相关字段。"""
    # 仅摘要允许显式置空，其余必填字段传 null 视为未修改。
    values = {
        key: value
        for key, value in changes.items()
        if key in {"date", "title", "content", "one"} and (value is not None or key == "one")
    }
    if not values:
        # 无可更新字段时仍需确认归属，保证对外语义一致。
        get_diary(db, identity=identity, diary_id=diary_id)
        return
    update_owned(db, DiaryEntry, identity, DiaryEntry.id == diary_id, values=values, message=DIARY_NOT_FOUND)


def delete_diary(db: Session, *, identity: IdentityClaims, diary_id: int) -> None:
    delete_owned(db, DiaryEntry, identity, DiaryEntry.id == diary_id, message=DIARY_NOT_FOUND)
