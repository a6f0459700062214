"""数据库引擎与请求级会话。"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from souldiary_api.core.config import get_settings

settings = get_settings()

# SQLite 仅用于本地与测试，会话可能跨线程使用。
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# hide_parameters 防止口令哈希等参数随异常信息返回给客户端。
engine = create_engine(
    settings.database_url,
    future=True,
    pool_pre_ping=True,
    hide_parameters=True,
    echo=settings.database_echo,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)


def get_db() -> Generator[Session, None, None]:
    """每个请求使用独立会话，请求结束即关闭。"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
