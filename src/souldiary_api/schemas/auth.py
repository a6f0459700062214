"""注册、登录与修改口令请求结构。"""

from pydantic import BaseModel, ConfigDict, Field

from souldiary_api.schemas.common import ApiResponse, BaseSchema


class SignupRequest(BaseModel):
    """注册请求。"""

    name: str = Field(min_length=1, max_length=128, description="展示名。", examples=["Alice"])
    user_id: str = Field(min_length=1, max_length=64, description="登录标识。", examples=["alice01"])
    password: str = Field(min_length=1, max_length=128, description="登录密码。", examples=["StrongPassw0rd!"])


class LoginRequest(BaseModel):
    """登录请求。"""

    user_id: str = Field(min_length=1, max_length=64, description="登录标识。", examples=["alice01"])
    password: str = Field(min_length=1, max_length=128, description="登录密码。", examples=["StrongPassw0rd!"])


class ChangePasswordRequest(BaseModel):
    """修改口令请求，必须同时提交当前口令。"""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(min_length=1, max_length=128, alias="currentPassword", description="当前口令。")
    new_password: str = Field(min_length=1, max_length=128, alias="newPassword", description="新口令。")


class LoginUser(BaseSchema):
    """登录返回的用户身份。"""

    user_id: str = Field(description="登录标识。")
    name: str = Field(description="展示名。")


class LoginData(ApiResponse):
    """登录结果结构。"""

    token: str = Field(description="Bearer 访问令牌，有效期 1 小时。")
    user: LoginUser = Field(description="当前登录用户。")
