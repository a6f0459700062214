"""日记模型。"""

import datetime as dt

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from souldiary_api.models.base import Base, TimestampMixin


class DiaryEntry(Base, TimestampMixin):
    """用户日记条目，仅作者本人可读写。"""

    __tablename__ = "diary"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 作者登录标识（逻辑关联 user.user_id，不声明数据库外键）。
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # 日记所属日期。
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # 一句话摘要。
    one: Mapped[str | None] = mapped_column(String(255))
