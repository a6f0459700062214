"""注册、登录与修改口令接口。"""

import logging

from fastapi import APIRouter, Depends, Request, status

from souldiary_api.core.errors import IdentityNotFound, InvalidCredential
from souldiary_api.core.security import IdentityClaims, TokenService, get_token_service
from souldiary_api.dependencies import get_credential_store, get_current_identity
from souldiary_api.schemas.auth import ChangePasswordRequest, LoginData, LoginRequest, SignupRequest
from souldiary_api.schemas.common import ApiResponse, ErrorResponse
from souldiary_api.services.credentials import CredentialStore
from souldiary_api.utils.response import success

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/signup",
    summary="注册账号",
    description="使用自选登录标识与口令注册账号，登录标识已存在时拒绝。",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def signup(
    payload: SignupRequest,
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
):
    """注册本地账号。"""
    store.create(name=payload.name, user_id=payload.user_id, password=payload.password)
    return success(request, message="User created successfully")


@router.post(
    "/login",
    summary="账号登录",
    description="校验口令并签发 1 小时有效的 Bearer 访问令牌。",
    status_code=status.HTTP_200_OK,
    response_model=LoginData,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service),
):
    """账号登录并签发访问令牌。"""
    try:
        user = store.verify(payload.user_id, payload.password)
    except IdentityNotFound as exc:
        raise InvalidCredential("User not found") from exc
    except InvalidCredential:
        logger.warning("login rejected user_id=%s reason=invalid_password", payload.user_id)
        raise

    issued = token_service.issue(IdentityClaims(user_id=user.user_id, name=user.name))
    return success(
        request,
        {"token": issued.token, "user": {"user_id": user.user_id, "name": user.name}},
        message="Login successful",
    )


@router.post(
    "/change-password",
    summary="修改口令",
    description="已登录用户提交当前口令与新口令，当前口令校验通过后更新。",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def change_password(
    payload: ChangePasswordRequest,
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    store: CredentialStore = Depends(get_credential_store),
):
    """修改当前用户口令。"""
    # 令牌认证之外，额外要求当前口令，防止被盗令牌直接改密。
    try:
        store.verify(identity.user_id, payload.current_password)
    except InvalidCredential as exc:
        raise InvalidCredential("Current password is incorrect") from exc
    store.update_password(identity.user_id, payload.new_password)
    return success(request, message="Password updated successfully")
