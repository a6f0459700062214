"""日记请求与响应结构。"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from souldiary_api.schemas.common import ApiResponse, BaseSchema


class DiaryCreateRequest(BaseModel):
    """新增日记请求体。"""

    date: dt.date = Field(description="日记日期（YYYY-MM-DD）。", examples=["2024-05-01"])
    title: str = Field(min_length=1, max_length=255, description="标题。")
    content: str = Field(min_length=1, description="正文。")
    one: str | None = Field(default=None, max_length=255, description="一句话摘要。")


class DiaryUpdateRequest(BaseModel):
    """更新日记请求体，仅提交需要修改的字段。"""

    model_config = ConfigDict(extra="ignore")

    date: dt.date | None = Field(default=None, description="日记日期（YYYY-MM-DD）。")
    title: str | None = Field(default=None, min_length=1, max_length=255, description="标题。")
    content: str | None = Field(default=None, min_length=1, description="正文。")
    one: str | None = Field(default=None, max_length=255, description="一句话摘要。")


class DiarySummary(BaseSchema):
    """日记列表项。"""

    id: int = Field(description="日记 ID。")
    title: str = Field(description="标题。")
    date: dt.date = Field(description="日记日期。")


class DiaryDetail(BaseSchema):
    """日记详情。"""

    id: int = Field(description="日记 ID。")
    user_id: str = Field(description="作者登录标识。")
    date: dt.date = Field(description="日记日期。")
    title: str = Field(description="标题。")
    content: str = Field(description="正文。")
    one: str | None = Field(default=None, description="一句话摘要。")


class DiaryCreatedData(ApiResponse):
    diary_id: int = Field(alias="diaryId", description="新建日记 ID。")


class DiaryListData(ApiResponse):
    diaries: list[DiarySummary] = Field(description="当前用户的日记列表。")


class DiaryDetailData(ApiResponse):
    diary: DiaryDetail = Field(description="日记详情。")
