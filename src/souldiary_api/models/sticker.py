"""贴纸目录与用户持有关系模型。"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from souldiary_api.models.base import Base


class Sticker(Base):
    """贴纸目录，只读参考数据。"""

    __tablename__ = "sticker"

    sticker_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    image_url: Mapped[str] = mapped_column(String(512), nullable=False)
    # 价格（coin）。
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class UserSticker(Base):
    """用户持有的贴纸。"""

    __tablename__ = "user_sticker"
    # 同一用户同一贴纸只能持有一次，作为并发重复购买的最终防线。
    __table_args__ = (UniqueConstraint("user_id", "sticker_id", name="uk_user_sticker"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    sticker_id: Mapped[int] = mapped_column(Integer, nullable=False)
