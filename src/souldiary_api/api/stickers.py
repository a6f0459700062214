"""贴纸接口。"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from souldiary_api.core.security import IdentityClaims
from souldiary_api.db.session import get_db
from souldiary_api.dependencies import get_current_identity
from souldiary_api.schemas.common import ApiResponse, ErrorResponse
from souldiary_api.schemas.sticker import CalendarStickerRequest, StickerItem, StickerListData, StickerPurchaseRequest
from souldiary_api.services import add_sticker_to_calendar, buy_sticker, list_catalog, list_user_stickers
from souldiary_api.utils.response import success

router = APIRouter(tags=["stickers"])

_AUTH_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.get(
    "/get-stickers",
    summary="查询贴纸目录",
    description="返回全部可购买贴纸。",
    status_code=status.HTTP_200_OK,
    response_model=StickerListData,
    responses=_AUTH_ERRORS,
    dependencies=[Depends(get_current_identity)],
)
def read_catalog(
    request: Request,
    db: Session = Depends(get_db),
):
    """查询贴纸目录。"""
    return success(request, {"stickers": [StickerItem.model_validate(sticker) for sticker in list_catalog(db)]})


@router.get(
    "/get-user-stickers",
    summary="查询已拥有贴纸",
    description="返回当前用户已购买的贴纸。",
    status_code=status.HTTP_200_OK,
    response_model=StickerListData,
    responses=_AUTH_ERRORS,
)
def read_user_stickers(
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """查询当前用户已拥有的贴纸。"""
    stickers = list_user_stickers(db, identity=identity)
    return success(request, {"stickers": [StickerItem.model_validate(sticker) for sticker in stickers]})


@router.post(
    "/buy-sticker",
    summary="购买贴纸",
    description="购买目录中的贴纸，已拥有时返回 400。",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def purchase_sticker(
    payload: StickerPurchaseRequest,
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """购买贴纸。"""
    buy_sticker(db, identity=identity, sticker_id=payload.sticker_id)
    return success(request, message="Sticker purchased successfully")


@router.post(
    "/add-to-calendar",
    summary="贴纸上日历",
    description="把已拥有的贴纸贴到指定日期的心情记录上。",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def stick_to_calendar(
    payload: CalendarStickerRequest,
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """把贴纸贴到日历。"""
    add_sticker_to_calendar(db, identity=identity, date=payload.date, sticker_id=payload.sticker_id)
    return success(request, message="Sticker added to calendar successfully")
