"""健康检查响应结构。"""

from pydantic import Field

from souldiary_api.schemas.common import ApiResponse


class HealthStatusData(ApiResponse):
    status: str = Field(description="ok 表示进程存活，ready 表示数据库可用。")
    database: str | None = Field(default=None, description="就绪探针返回当前数据库方言。")
