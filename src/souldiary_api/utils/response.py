"""统一响应结构工具。

成功与失败响应都平铺为 `{isSuccess, message, ...}`，
请求追踪 ID 通过响应头 `X-Request-Id` 返回。
"""

from typing import Any

from fastapi import Request

DEFAULT_ERROR_MESSAGE = "Server error."

_SUCCESS_MESSAGE_BY_METHOD = {
    "GET": "Fetched successfully.",
    "POST": "Operation successful.",
    "PUT": "Updated successfully.",
    "PATCH": "Updated successfully.",
    "DELETE": "Deleted successfully.",
}


def success(request: Request, data: dict[str, Any] | None = None, message: str | None = None) -> dict[str, Any]:
    """构造统一成功响应结构。"""
    payload: dict[str, Any] = {
        "isSuccess": True,
        "message": message or _SUCCESS_MESSAGE_BY_METHOD.get(request.method.upper(), "Operation successful."),
    }
    if data:
        payload.update(data)
    return payload


def error_payload(
    request: Request,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """构造统一错误响应结构。"""
    payload: dict[str, Any] = {
        "isSuccess": False,
        "message": message,
        "code": code,
        "request_id": getattr(request.state, "request_id", None),
    }
    if details:
        payload["details"] = details
    return payload
