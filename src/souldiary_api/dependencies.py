"""请求上下文依赖。

职责:
1. 从 Authorization 头提取并校验访问令牌。
2. 将令牌声明转换为显式传递的认证身份。
3. 提供按请求构造的凭据服务。

认证阶段只做签名与有效期校验，不访问数据库。
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from souldiary_api.core.config import get_settings
from souldiary_api.core.errors import Forbidden, TokenError
from souldiary_api.core.security import IdentityClaims, TokenService, extract_bearer_token, get_token_service
from souldiary_api.db.session import get_db
from souldiary_api.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(authorization: str | None, token_service: TokenService) -> IdentityClaims:
    """解析认证头并返回认证身份。

    判定规则：
    1. 缺少 Bearer 令牌返回 401。
    2. 令牌格式、签名或有效期任一不通过返回 403。
    """
    token = extract_bearer_token(authorization)
    try:
        return token_service.verify(token)
    except TokenError as exc:
        logger.warning("token rejected reason=%s", exc.code)
        raise Forbidden() from exc


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> IdentityClaims:
    """提取并解析当前请求认证身份。"""
    authorization = None
    if credentials is not None and credentials.credentials:
        authorization = f"{credentials.scheme} {credentials.credentials}"
    return authenticate(authorization, token_service)


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    """按请求会话构造凭据服务。"""
    return CredentialStore(db, hash_iterations=get_settings().auth_password_hash_iterations)
