import datetime as dt

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from souldiary_api.core.errors import AlreadyOwned, NotFoundOrForbidden
from souldiary_api.core.security import IdentityClaims
from souldiary_api.models.diary import DiaryEntry
from souldiary_api.models.mood import MoodRecord
from souldiary_api.models.sticker import UserSticker
from souldiary_api.services import (
    add_diary,
    add_sticker_to_calendar,
    buy_sticker,
    delete_diary,
    get_diary,
    get_mood,
    get_mood_range,
    list_catalog,
    list_diaries,
    list_user_stickers,
    set_mood,
    update_diary,
)
from souldiary_api.services import stickers as stickers_service

MAY_FIRST = dt.date(2024, 5, 1)


def _add(db: Session, identity: IdentityClaims, title: str = "Day one") -> DiaryEntry:
    return add_diary(db, identity=identity, date=MAY_FIRST, title=title, content="content", one="good day")


def test_add_diary_forces_owner(db_session: Session, alice: IdentityClaims):
    entry = _add(db_session, alice)

    assert entry.id is not None
    assert entry.user_id == "alice"


def test_diary_isolation_between_users(db_session: Session, alice: IdentityClaims, bob: IdentityClaims):
    entry = _add(db_session, alice)

    assert list_diaries(db_session, identity=bob) == []
    with pytest.raises(NotFoundOrForbidden) as exc:
        get_diary(db_session, identity=bob, diary_id=entry.id)
    assert exc.value.status_code == 404
    with pytest.raises(NotFoundOrForbidden):
        update_diary(db_session, identity=bob, diary_id=entry.id, changes={"title": "hacked"})
    with pytest.raises(NotFoundOrForbidden):
        delete_diary(db_session, identity=bob, diary_id=entry.id)

    own = get_diary(db_session, identity=alice, diary_id=entry.id)
    assert own.title == "Day one"
    assert [item.id for item in list_diaries(db_session, identity=alice)] == [entry.id]

    delete_diary(db_session, identity=alice, diary_id=entry.id)
    with pytest.raises(NotFoundOrForbidden):
        get_diary(db_session, identity=alice, diary_id=entry.id)


def test_missing_and_foreign_diary_are_indistinguishable(db_session: Session, alice: IdentityClaims, bob: IdentityClaims):
    entry = _add(db_session, alice)

    with pytest.raises(NotFoundOrForbidden) as foreign:
        get_diary(db_session, identity=bob, diary_id=entry.id)
    with pytest.raises(NotFoundOrForbidden) as missing:
        get_diary(db_session, identity=bob, diary_id=entry.id + 100)
    assert foreign.value.detail == missing.value.detail


def test_update_diary_by_owner(db_session: Session, alice: IdentityClaims):
    entry = _add(db_session, alice)

    update_diary(db_session, identity=alice, diary_id=entry.id, changes={"title": "Renamed", "content": None})

    updated = get_diary(db_session, identity=alice, diary_id=entry.id)
    assert updated.title == "Renamed"
    assert updated.content == "content"


def test_list_diaries_ordered_by_date(db_session: Session, alice: IdentityClaims):
    later = add_diary(db_session, identity=alice, date=dt.date(2024, 5, 3), title="later", content="c")
    earlier = add_diary(db_session, identity=alice, date=dt.date(2024, 5, 2), title="earlier", content="c")

    assert [item.id for item in list_diaries(db_session, identity=alice)] == [earlier.id, later.id]


def test_mood_upsert_overwrites_color(db_session: Session, alice: IdentityClaims):
    set_mood(db_session, identity=alice, date=MAY_FIRST, color="red")
    assert get_mood(db_session, identity=alice, date=MAY_FIRST).color == "red"

    set_mood(db_session, identity=alice, date=MAY_FIRST, color="blue")

    rows = db_session.execute(select(MoodRecord).where(MoodRecord.user_id == "alice")).scalars().all()
    assert len(rows) == 1
    assert rows[0].color == "blue"


def test_mood_is_scoped_per_user(db_session: Session, alice: IdentityClaims, bob: IdentityClaims):
    set_mood(db_session, identity=alice, date=MAY_FIRST, color="red")
    set_mood(db_session, identity=bob, date=MAY_FIRST, color="green")

    assert get_mood(db_session, identity=alice, date=MAY_FIRST).color == "red"
    assert get_mood(db_session, identity=bob, date=MAY_FIRST).color == "green"
    assert db_session.execute(select(func.count()).select_from(MoodRecord)).scalar_one() == 2


def test_get_mood_missing_day(db_session: Session, alice: IdentityClaims):
    with pytest.raises(NotFoundOrForbidden):
        get_mood(db_session, identity=alice, date=MAY_FIRST)


def test_mood_range_is_inclusive_and_owner_filtered(db_session: Session, alice: IdentityClaims, bob: IdentityClaims):
    for day, color in [(3, "blue"), (1, "red"), (5, "yellow"), (9, "black")]:
        set_mood(db_session, identity=alice, date=dt.date(2024, 5, day), color=color)
    set_mood(db_session, identity=bob, date=dt.date(2024, 5, 2), color="green")

    moods = get_mood_range(db_session, identity=alice, start_date=dt.date(2024, 5, 1), end_date=dt.date(2024, 5, 5))

    assert [(mood.date.day, mood.color) for mood in moods] == [(1, "red"), (3, "blue"), (5, "yellow")]


def test_mood_range_empty(db_session: Session, alice: IdentityClaims):
    with pytest.raises(NotFoundOrForbidden):
        get_mood_range(db_session, identity=alice, start_date=dt.date(2024, 1, 1), end_date=dt.date(2024, 1, 31))


def test_buy_sticker_twice_is_rejected(db_session: Session, alice: IdentityClaims, sticker_catalog):
    buy_sticker(db_session, identity=alice, sticker_id=7)

    with pytest.raises(AlreadyOwned) as exc:
        buy_sticker(db_session, identity=alice, sticker_id=7)
    assert exc.value.status_code == 400

    assert [sticker.sticker_id for sticker in list_user_stickers(db_session, identity=alice)] == [7]


def test_buy_unknown_sticker(db_session: Session, alice: IdentityClaims, sticker_catalog):
    with pytest.raises(NotFoundOrForbidden):
        buy_sticker(db_session, identity=alice, sticker_id=999)


def test_sticker_ownership_is_per_user(db_session: Session, alice: IdentityClaims, bob: IdentityClaims, sticker_catalog):
    buy_sticker(db_session, identity=alice, sticker_id=7)
    buy_sticker(db_session, identity=bob, sticker_id=7)
    buy_sticker(db_session, identity=bob, sticker_id=8)

    assert [sticker.sticker_id for sticker in list_user_stickers(db_session, identity=alice)] == [7]
    assert [sticker.sticker_id for sticker in list_user_stickers(db_session, identity=bob)] == [7, 8]
    assert [sticker.sticker_id for sticker in list_catalog(db_session)] == [7, 8]


def test_unique_constraint_guards_concurrent_purchase(
    db_session: Session, alice: IdentityClaims, sticker_catalog, monkeypatch
):
    buy_sticker(db_session, identity=alice, sticker_id=7)
    # 模拟两个请求都通过了预检查。
    monkeypatch.setattr(stickers_service, "is_sticker_owned", lambda *args, **kwargs: False)

    with pytest.raises(AlreadyOwned):
        buy_sticker(db_session, identity=alice, sticker_id=7)

    count = db_session.execute(
        select(func.count()).select_from(UserSticker).where(UserSticker.user_id == "alice")
    ).scalar_one()
    assert count == 1


def test_user_sticker_pair_is_unique_in_datastore(db_session: Session, sticker_catalog):
    db_session.add(UserSticker(user_id="alice", sticker_id=7))
    db_session.commit()
    db_session.add(UserSticker(user_id="alice", sticker_id=7))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_add_sticker_to_calendar(db_session: Session, alice: IdentityClaims, sticker_catalog):
    buy_sticker(db_session, identity=alice, sticker_id=7)
    set_mood(db_session, identity=alice, date=MAY_FIRST, color="red")

    add_sticker_to_calendar(db_session, identity=alice, date=MAY_FIRST, sticker_id=7)

    mood = get_mood(db_session, identity=alice, date=MAY_FIRST)
    assert mood.sticker_id == 7
    assert mood.color == "red"


def test_color_update_keeps_calendar_sticker(db_session: Session, alice: IdentityClaims, sticker_catalog):
    buy_sticker(db_session, identity=alice, sticker_id=7)
    set_mood(db_session, identity=alice, date=MAY_FIRST, color="red", sticker_id=7)

    set_mood(db_session, identity=alice, date=MAY_FIRST, color="blue")

    mood = get_mood(db_session, identity=alice, date=MAY_FIRST)
    assert (mood.color, mood.sticker_id) == ("blue", 7)


def test_add_sticker_to_calendar_requires_ownership(
    db_session: Session, alice: IdentityClaims, bob: IdentityClaims, sticker_catalog
):
    buy_sticker(db_session, identity=bob, sticker_id=8)
    set_mood(db_session, identity=alice, date=MAY_FIRST, color="red")

    with pytest.raises(NotFoundOrForbidden):
        add_sticker_to_calendar(db_session, identity=alice, date=MAY_FIRST, sticker_id=8)
    with pytest.raises(NotFoundOrForbidden):
        set_mood(db_session, identity=alice, date=MAY_FIRST, color="blue", sticker_id=8)
    assert get_mood(db_session, identity=alice, date=MAY_FIRST).sticker_id is None


def test_add_sticker_to_calendar_requires_mood_record(
    db_session: Session, alice: IdentityClaims, bob: IdentityClaims, sticker_catalog
):
    buy_sticker(db_session, identity=alice, sticker_id=7)
    set_mood(db_session, identity=bob, date=MAY_FIRST, color="green")

    with pytest.raises(NotFoundOrForbidden):
        add_sticker_to_calendar(db_session, identity=alice, date=MAY_FIRST, sticker_id=7)
    assert get_mood(db_session, identity=bob, date=MAY_FIRST).sticker_id is None
