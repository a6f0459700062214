"""贴纸请求与响应结构。"""

import datetime as dt

from pydantic import BaseModel, Field

from souldiary_api.schemas.common import ApiResponse, BaseSchema


class StickerPurchaseRequest(BaseModel):
    """购买贴纸请求体。"""

    sticker_id: int = Field(description="目录中的贴纸 ID。", examples=[7])


class CalendarStickerRequest(BaseModel):
    """把贴纸贴到日历请求体。"""

    date: dt.date = Field(description="日期（YYYY-MM-DD），当天需已有心情记录。")
    sticker_id: int = Field(description="已拥有的贴纸 ID。")


class StickerItem(BaseSchema):
    """贴纸目录项。"""

    sticker_id: int = Field(description="贴纸 ID。")
    name: str = Field(description="贴纸名称。")
    image_url: str = Field(description="贴纸图片地址。")
    price: int = Field(description="价格（coin）。")


class StickerListData(ApiResponse):
    stickers: list[StickerItem] = Field(description="贴纸列表。")
