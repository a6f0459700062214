"""访问令牌签发、校验与 Bearer 头解析。

令牌为无状态 JWT，声明在有效期内被直接信任：
校验时不会回查用户表，用户改名或失效需等令牌过期后才体现。
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
import re
from typing import Any

import jwt
from jwt import DecodeError, InvalidSignatureError, InvalidTokenError

from souldiary_api.core.config import get_settings
from souldiary_api.core.errors import TokenExpired, TokenInvalidSignature, TokenMalformed, Unauthorized


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IdentityClaims:
    """令牌内携带的身份声明，认证通过后即作为当前请求身份显式传递。"""

    # 用户登录标识。
    user_id: str
    # 签发时刻的用户展示名。
    name: str


@dataclass(frozen=True)
class IssuedToken:
    """签发结果。"""

    token: str
    expires_at: datetime


class TokenService:
    """基于对称密钥的访问令牌服务。

    密钥、算法与有效期在构造时注入，进程运行期间不变；
    `clock` 可替换，便于测试过期边界。
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, claims: IdentityClaims) -> IssuedToken:
        """签发带绝对过期时间的访问令牌。"""
        now = self._clock()
        expires_at = now + self._ttl
        payload: dict[str, Any] = {
            "sub": claims.user_id,
            "name": claims.name,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> IdentityClaims:
        """校验签名与有效期，返回原样的身份声明。"""
        try:
            # 过期判断统一使用注入的时钟，不交给 PyJWT 取系统时间。
            payload = jwt.decode(
                token,
                key=self._secret,
                algorithms=[self._algorithm],
                options={"verify_signature": True, "verify_exp": False, "verify_iat": False, "require": ["exp", "sub"]},
            )
        except InvalidSignatureError as exc:
            raise TokenInvalidSignature() from exc
        except (DecodeError, InvalidTokenError) as exc:
            raise TokenMalformed() from exc

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise TokenMalformed("Token expiry claim is invalid.")
        if int(self._clock().timestamp()) >= exp:
            raise TokenExpired()

        user_id = payload.get("sub")
        name = payload.get("name")
        if not isinstance(user_id, str) or not user_id:
            raise TokenMalformed("Token subject claim is invalid.")
        if not isinstance(name, str):
            raise TokenMalformed("Token name claim is invalid.")
        return IdentityClaims(user_id=user_id, name=name)


@lru_cache
def get_token_service() -> TokenService:
    """按启动配置构造进程级令牌服务。"""
    settings = get_settings()
    return TokenService(
        secret=settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
        ttl_seconds=settings.auth_access_token_ttl_seconds,
    )


def extract_bearer_token(authorization: str | None) -> str:
    """从 Authorization 头中提取 Bearer token，兼容重复头被逗号拼接的场景。"""
    if not authorization:
        raise Unauthorized()
    tokens = [token.strip() for token in re.findall(r"Bearer\s+([^,\s]+)", authorization, flags=re.IGNORECASE)]
    tokens = [token for token in tokens if token]
    if not tokens:
        raise Unauthorized()
    return tokens[-1]
