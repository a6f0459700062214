"""心情日历请求与响应结构。"""

import datetime as dt

from pydantic import BaseModel, Field

from souldiary_api.schemas.common import ApiResponse, BaseSchema


class MoodSetRequest(BaseModel):
    """设置心情颜色请求体。"""

    date: dt.date = Field(description="日期（YYYY-MM-DD）。", examples=["2024-05-01"])
    color: str = Field(min_length=1, max_length=32, description="心情颜色。", examples=["red"])
    sticker_id: int | None = Field(default=None, description="可选，贴在当天的已拥有贴纸。")


class MoodItem(BaseSchema):
    """区间查询中的单日心情。"""

    date: dt.date = Field(description="日期。")
    color: str = Field(description="心情颜色。")


class MoodColorData(ApiResponse):
    color: str = Field(description="当天心情颜色。")


class MoodRangeData(ApiResponse):
    moods: list[MoodItem] = Field(description="区间内按日期排序的心情记录。")
