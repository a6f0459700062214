"""存活与就绪探针。"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from souldiary_api.db.session import get_db
from souldiary_api.schemas.common import ErrorResponse
from souldiary_api.schemas.health import HealthStatusData
from souldiary_api.utils.response import success

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", summary="存活探针", response_model=HealthStatusData)
def live(request: Request):
    return success(request, {"status": "ok"})


@router.get(
    "/ready",
    summary="就绪探针",
    description="执行 `SELECT 1` 确认数据库可用，数据库异常时返回 500 BACKEND_FAILURE。",
    response_model=HealthStatusData,
    responses={500: {"model": ErrorResponse}},
)
def ready(request: Request, db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return success(request, {"status": "ready", "database": db.get_bind().dialect.name})
