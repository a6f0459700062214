"""全局通用结构。

用于定义统一响应结构，便于在线接口文档展示与联调。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """基础结构，开启对象映射能力，允许字段名与别名同时赋值。"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ApiResponse(BaseSchema):
    """统一成功响应，业务字段与 `isSuccess`、`message` 平铺。"""

    is_success: bool = Field(default=True, alias="isSuccess", description="请求是否成功。")
    message: str = Field(default="", description="人类可读提示信息。")


class ErrorResponse(BaseSchema):
    """统一错误响应。"""

    is_success: bool = Field(default=False, alias="isSuccess", description="固定为 false。")
    message: str = Field(description="人类可读错误信息。")
    code: str = Field(description="机器可识别错误码。")
    request_id: str | None = Field(default=None, description="服务端生成的请求追踪 ID。")
    details: dict[str, Any] = Field(default_factory=dict, description="可选扩展错误细节。")
