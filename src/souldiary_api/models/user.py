"""用户与本地凭据模型。"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from souldiary_api.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """注册用户，登录标识由用户自行选择。"""

    __tablename__ = "user"

    # 登录标识，全局唯一，注册后不可变更。
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True, comment="登录标识。")
    # 展示名。
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    # 口令哈希，不存明文。
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    # 贴纸货币余额，由外部运营流程维护。
    coin: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
