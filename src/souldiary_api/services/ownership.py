"""资源归属校验服务。

日记、心情、贴纸持有记录都以 `user_id` 归属到唯一用户。
所有读、改、删都必须附加“归属 = 当前认证用户”的过滤条件，
不存在与不属于当前用户两种情况对外统一返回 404。
"""

from typing import Any, TypeVar

from sqlalchemy import Select, delete, select, update
from sqlalchemy.orm import Session

from souldiary_api.core.errors import NotFoundOrForbidden
from souldiary_api.core.security import IdentityClaims

ModelT = TypeVar("ModelT")


def owned_by(stmt: Select, model: Any, identity: IdentityClaims) -> Select:
    """为查询附加归属过滤条件。"""
    return stmt.where(model.user_id == identity.user_id)


def list_owned(db: Session, model: type[ModelT], identity: IdentityClaims, *order_by: Any) -> list[ModelT]:
    """列出当前用户名下的全部记录。"""
    stmt = owned_by(select(model), model, identity)
    if order_by:
        stmt = stmt.order_by(*order_by)
    return list(db.execute(stmt).scalars().all())


def get_owned(
    db: Session,
    model: type[ModelT],
    identity: IdentityClaims,
    *conditions: Any,
    message: str | None = None,
) -> ModelT:
    """按条件查询当前用户名下的单条记录，未命中时抛出 404。"""
    stmt = owned_by(select(model), model, identity).where(*conditions)
    row = db.execute(stmt).scalar_one_or_none()
    if row is None:
        raise NotFoundOrForbidden(message)
    return row


def update_owned(
    db: Session,
    model: Any,
    identity: IdentityClaims,
    *conditions: Any,
    values: dict[str, Any],
    message: str | None = None,
) -> int:
    """按归属过滤更新记录，影响行数为 0 时抛出 404。"""
    stmt = update(model).where(model.user_id == identity.user_id).where(*conditions).values(**values)
    affected = db.execute(stmt).rowcount
    if not affected:
        db.rollback()
        raise NotFoundOrForbidden(message)
    db.commit()
    return affected


def delete_owned(
    db: Session,
    model: Any,
    identity: IdentityClaims,
    *conditions: Any,
    message: str | None = None,
) -> int:
    """按归属过滤删除记录，影响行数为 0 时抛出 404。"""
    stmt = delete(model).where(model.user_id == identity.user_id).where(*conditions)
    affected = db.execute(stmt).rowcount
    if not affected:
        db.rollback()
        raise NotFoundOrForbidden(message)
    db.commit()
    return affected
