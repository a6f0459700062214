"""用户资料响应结构。"""

from pydantic import Field

from souldiary_api.schemas.common import ApiResponse, BaseSchema


class UserProfile(BaseSchema):
    """用户基础资料。"""

    name: str = Field(description="展示名。")
    user_id: str = Field(description="登录标识。")
    coin: int = Field(description="贴纸货币余额。")


class UserInfoData(ApiResponse):
    """`/user-info` 返回结构。"""

    user: UserProfile = Field(description="当前登录用户资料。")
