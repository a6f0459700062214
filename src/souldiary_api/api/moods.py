"""心情日历接口。"""

import datetime as dt

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.orm import Session

from souldiary_api.core.security import IdentityClaims
from souldiary_api.db.session import get_db
from souldiary_api.dependencies import get_current_identity
from souldiary_api.schemas.common import ApiResponse, ErrorResponse
from souldiary_api.schemas.mood import MoodColorData, MoodItem, MoodRangeData, MoodSetRequest
from souldiary_api.services import get_mood, get_mood_range, set_mood
from souldiary_api.utils.response import success

router = APIRouter(tags=["moods"])

_AUTH_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.post(
    "/set-mood",
    summary="设置心情颜色",
    description="按 (用户, 日期) upsert 心情颜色，同一天重复设置会覆盖原颜色。",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def put_mood(
    payload: MoodSetRequest,
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """设置当天心情颜色。"""
    set_mood(db, identity=identity, date=payload.date, color=payload.color, sticker_id=payload.sticker_id)
    return success(request, message="Mood color set successfully")


@router.get(
    "/get-mood-range",
    summary="查询区间心情",
    description="返回 startDate 至 endDate（含）之间的心情颜色，两端均需为合法日期。",
    status_code=status.HTTP_200_OK,
    response_model=MoodRangeData,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def read_mood_range(
    request: Request,
    start_date: dt.date = Query(..., alias="startDate", description="起始日期（YYYY-MM-DD）。"),
    end_date: dt.date = Query(..., alias="endDate", description="结束日期（YYYY-MM-DD）。"),
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """查询区间内心情颜色。"""
    moods = get_mood_range(db, identity=identity, start_date=start_date, end_date=end_date)
    return success(request, {"moods": [MoodItem.model_validate(mood) for mood in moods]})


@router.get(
    "/get-mood/{date}",
    summary="查询单日心情",
    description="返回指定日期的心情颜色，无记录时返回 404。",
    status_code=status.HTTP_200_OK,
    response_model=MoodColorData,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def read_mood(
    request: Request,
    date: dt.date = Path(..., description="日期（YYYY-MM-DD）。"),
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """查询单日心情颜色。"""
    mood = get_mood(db, identity=identity, date=date)
    return success(request, {"color": mood.color})
