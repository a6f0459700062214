"""日记接口。"""

from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from souldiary_api.core.security import IdentityClaims
from souldiary_api.db.session import get_db
from souldiary_api.dependencies import get_current_identity
from souldiary_api.schemas.common import ApiResponse, ErrorResponse
from souldiary_api.schemas.diary import (
    DiaryCreateRequest,
    DiaryCreatedData,
    DiaryDetail,
    DiaryDetailData,
    DiaryListData,
    DiarySummary,
    DiaryUpdateRequest,
)
from souldiary_api.services import add_diary, delete_diary, get_diary, list_diaries, update_diary
from souldiary_api.utils.response import success

router = APIRouter(tags=["diaries"])

_AUTH_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.post(
    "/add-diary",
    summary="新增日记",
    description="为当前用户新增一篇日记，作者固定为令牌中的用户。",
    status_code=status.HTTP_201_CREATED,
    response_model=DiaryCreatedData,
    responses={400: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def create_diary(
    payload: DiaryCreateRequest,
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """新增日记。"""
    entry = add_diary(
        db,
        identity=identity,
        date=payload.date,
        title=payload.title,
        content=payload.content,
        one=payload.one,
    )
    return success(request, {"diaryId": entry.id}, message="Diary added successfully")


@router.get(
    "/get-diaries",
    summary="查询日记列表",
    description="返回当前用户全部日记的 ID、标题与日期。",
    status_code=status.HTTP_200_OK,
    response_model=DiaryListData,
    responses=_AUTH_ERRORS,
)
def read_diaries(
    request: Request,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """查询当前用户日记列表。"""
    entries = list_diaries(db, identity=identity)
    return success(request, {"diaries": [DiarySummary.model_validate(entry) for entry in entries]})


@router.get(
    "/get-diary/{diary_id}",
    summary="查询日记详情",
    description="仅作者本人可查看；不存在与无权访问统一返回 404。",
    status_code=status.HTTP_200_OK,
    response_model=DiaryDetailData,
    responses={404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def read_diary(
    request: Request,
    diary_id: int = Path(..., description="日记 ID。"),
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """查询单篇日记。"""
    entry = get_diary(db, identity=identity, diary_id=diary_id)
    return success(request, {"diary": DiaryDetail.model_validate(entry)})


@router.put(
    "/update-diary/{diary_id}",
    summary="更新日记",
    description="部分更新日记字段，仅作者本人可修改。",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def edit_diary(
    payload: DiaryUpdateRequest,
    request: Request,
    diary_id: int = Path(..., description="日记 ID。"),
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """更新日记。"""
    update_diary(db, identity=identity, diary_id=diary_id, changes=payload.model_dump(exclude_unset=True))
    return success(request, message="Diary updated successfully")


@router.delete(
    "/delete-diary/{diary_id}",
    summary="删除日记",
    description="仅作者本人可删除；不存在与无权删除统一返回 404。",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    responses={404: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def remove_diary(
    request: Request,
    diary_id: int = Path(..., description="日记 ID。"),
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """删除日记。"""
    delete_diary(db, identity=identity, diary_id=diary_id)
    return success(request, message="Diary deleted successfully")
