"""本地账号凭据服务。"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from souldiary_api.core.errors import DuplicateIdentity, IdentityNotFound, InvalidCredential
from souldiary_api.models.user import User

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: int) -> str:
    """使用 PBKDF2-SHA256 生成带随机盐的口令哈希。"""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    salt_b64 = base64.b64encode(salt).decode("ascii")
    digest_b64 = base64.b64encode(digest).decode("ascii")
    return f"{HASH_ALGORITHM}${iterations}${salt_b64}${digest_b64}"


def verify_password(password: str, password_hash: str) -> bool:
    """校验口令是否匹配，哈希格式损坏时一律视为不匹配。"""
    try:
        algorithm, iterations_text, salt_b64, expected_digest_b64 = password_hash.split("$", 3)
        if algorithm != HASH_ALGORITHM:
            return False
        iterations = int(iterations_text)
        salt = base64.b64decode(salt_b64.encode("ascii"), validate=True)
        expected_digest = base64.b64decode(expected_digest_b64.encode("ascii"), validate=True)
    except (ValueError, TypeError, binascii.Error):
        return False
    if iterations <= 0:
        return False

    actual_digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(actual_digest, expected_digest)


class CredentialStore:
    """用户身份与口令哈希的持久化入口。

    只负责凭据本身；“修改口令前必须校验旧口令”属于业务规则，由接口层保证。
    """

    def __init__(self, db: Session, *, hash_iterations: int) -> None:
        self.db = db
        self.hash_iterations = hash_iterations

    def find(self, user_id: str) -> User | None:
        """按登录标识精确查找用户。"""
        return self.db.execute(select(User).where(User.user_id == user_id)).scalar_one_or_none()

    def create(self, *, name: str, user_id: str, password: str) -> User:
        """创建用户，登录标识已存在时拒绝且不覆盖原记录。"""
        if self.find(user_id) is not None:
            raise DuplicateIdentity()

        user = User(
            user_id=user_id,
            name=name,
            password_hash=hash_password(password, iterations=self.hash_iterations),
            coin=0,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # 并发注册同一标识时，主键约束是最终裁决。
            self.db.rollback()
            raise DuplicateIdentity() from exc
        logger.info("user created user_id=%s", user_id)
        return user

    def verify(self, user_id: str, password: str) -> User:
        """校验口令并返回用户。"""
        user = self.find(user_id)
        if user is None:
            raise IdentityNotFound()
        if not verify_password(password, user.password_hash):
            raise InvalidCredential()
        return user

    def update_password(self, user_id: str, new_password: str) -> None:
        """重新生成口令哈希并覆盖。"""
        user = self.find(user_id)
        if user is None:
            raise IdentityNotFound()
        user.password_hash = hash_password(new_password, iterations=self.hash_iterations)
        self.db.commit()
        logger.info("password updated user_id=%s", user_id)
