"""用户资料接口。"""

from fastapi import APIRouter, Depends, Request, status

from souldiary_api.core.errors import IdentityNotFound
from souldiary_api.core.security import IdentityClaims
from souldiary_api.dependencies import get_credential_store, get_current_identity
from souldiary_api.schemas.common import ErrorResponse
from souldiary_api.schemas.user import UserInfoData
from souldiary_api.services.credentials import CredentialStore
from souldiary_api.utils.response import success

router = APIRouter(tags=["users"])


@router.get(
    "/user-info",
    summary="查询当前用户资料",
    description="返回当前登录用户的展示名、登录标识与 coin 余额。",
    status_code=status.HTTP_200_OK,
    response_model=UserInfoData,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def user_info(
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    store: CredentialStore = Depends(get_credential_store),
):
    """查询当前用户资料。"""
    user = store.find(identity.user_id)
    if user is None:
        raise IdentityNotFound()
    return success(request, {"user": {"name": user.name, "user_id": user.user_id, "coin": user.coin}})
