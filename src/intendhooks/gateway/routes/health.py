"""健康检查路由

GET /: 服务问候语（纯文本）。
GET /healthz: Liveness 检查，永远返回 200 "OK"。
GET /ready: Readiness 检查，探测文档库连通性并报告 WAL 状态。
"""

import structlog
from fastapi import APIRouter, Request
from intendhooks.core.store.sqlite_init import verify_wal_mode
from starlette.responses import JSONResponse, PlainTextResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index():
    return "Hello, intend-webhooks!"


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz():
    """Liveness 检查 -- 永远返回 200"""
    return "OK"


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- SQLite 不可用时返回 503

    WAL 未生效只影响并发读写，记为 "disabled"，不影响就绪状态。
    """
    checks = {}
    all_ok = True

    try:
        wal = await verify_wal_mode(request.app.state.store_group.conn)
        checks["sqlite"] = "ok"
        checks["wal"] = "ok" if wal else "disabled"
    except Exception as e:
        log.warning("readiness_sqlite_failed", error=str(e))
        checks["sqlite"] = "unavailable"
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
