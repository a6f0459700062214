"""心情日历模型。"""

import datetime as dt

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from souldiary_api.models.base import Base


class MoodRecord(Base):
    """每个用户每天至多一条心情颜色记录。"""

    __tablename__ = "calendar"

    # (user_id, date) 复合主键，保证同一天只有一条记录，也是 upsert 的冲突键。
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, primary_key=True)
    # 心情颜色，例如 red / #ffcc00。
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    # 贴在当天日历上的贴纸，必须是用户已拥有的贴纸。
    sticker_id: Mapped[int | None] = mapped_column(Integer)
