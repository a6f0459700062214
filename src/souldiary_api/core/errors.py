"""业务异常定义。

所有业务异常均继承 `AppError`（本身是 `HTTPException`），
由统一异常处理器转换为 `{isSuccess: false, message, code}` 结构。
"""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """带机器错误码的业务异常基类。"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Server error."

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.message = message or type(self).message
        detail: dict[str, Any] = {"code": self.code, "message": self.message}
        if details:
            detail["details"] = details
        super().__init__(status_code=type(self).status_code, detail=detail)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class Unauthorized(AppError):
    """未携带访问令牌。"""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    message = "Authentication token is required."


class InvalidCredential(AppError):
    """账号或口令校验失败。"""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIAL"
    message = "Invalid password."


class Forbidden(AppError):
    """访问令牌未通过签名或有效期校验。"""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "Invalid or expired token."


class TokenError(AppError):
    """令牌校验失败基类。"""

    status_code = status.HTTP_403_FORBIDDEN
    code = "TOKEN_INVALID"
    message = "Invalid token."


class TokenMalformed(TokenError):
    code = "TOKEN_MALFORMED"
    message = "Token is malformed."


class TokenInvalidSignature(TokenError):
    code = "TOKEN_INVALID_SIGNATURE"
    message = "Token signature mismatch."


class TokenExpired(TokenError):
    code = "TOKEN_EXPIRED"
    message = "Token has expired."


class IdentityNotFound(AppError):
    """用户标识不存在。"""

    status_code = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"
    message = "User not found."


class NotFoundOrForbidden(AppError):
    """资源不存在或不属于当前用户，对外不做区分。"""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Resource not found or you are not authorized to access it."


class DuplicateIdentity(AppError):
    """注册时用户标识已存在。"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "DUPLICATE_IDENTITY"
    message = "User id already exists."


class AlreadyOwned(AppError):
    """重复购买已拥有的贴纸。"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "ALREADY_OWNED"
    message = "Sticker already owned."


class BackendFailure(AppError):
    """数据库或哈希原语异常。"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "BACKEND_FAILURE"
    message = "Server error."
