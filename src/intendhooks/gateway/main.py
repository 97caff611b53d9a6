"""FastAPI 应用主文件

app 创建 + lifespan 管理：文档库初始化/关闭 + 计数策略加载 + 路由注册。
异常映射：MalformedEventError / 请求校验失败 -> 400，StoreError -> 500。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from intendhooks.core.config import (
    CORS_MAX_AGE,
    get_db_path,
    get_frontend_origin,
    load_pomodoro_policy,
)
from intendhooks.core.exceptions import (
    MalformedEventError,
    StoreError,
    StoreQueryError,
    StoreReadError,
    StoreWriteError,
)
from intendhooks.core.store import create_store_group
from starlette.responses import JSONResponse

from .middleware.logging_config import setup_logging
from .middleware.request_context_mw import REQUEST_ID_HEADER, RequestContextMiddleware
from .routes import health, users, webhook

log = structlog.get_logger()

_STORE_ERROR_CODES: dict[type[StoreError], str] = {
    StoreReadError: "STORE_READ_FAILED",
    StoreWriteError: "STORE_WRITE_FAILED",
    StoreQueryError: "STORE_QUERY_FAILED",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化文档库，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    policy = load_pomodoro_policy()
    app.state.pomodoro_policy = policy
    log.info(
        "store_initialized",
        db_path=db_path,
        reset_on_task_change=policy.reset_on_task_change,
        first_pomodoro_count=policy.first_pomodoro_count,
    )

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def _malformed_event_handler(request: Request, exc: MalformedEventError) -> JSONResponse:
    log.warning("malformed_event", error=str(exc))
    return _error_response(400, "MALFORMED_EVENT", str(exc))


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    log.warning("invalid_request", errors=exc.errors())
    return _error_response(400, "INVALID_REQUEST", "Request body or parameters are invalid")


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    code = _STORE_ERROR_CODES.get(type(exc), "STORE_FAILED")
    return _error_response(500, code, str(exc))


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Intend Webhooks",
        version="0.1.0",
        description="Intend 任务与番茄钟 webhook 接收服务",
        lifespan=lifespan,
    )

    # 注册中间件（CORS 最外层）
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[get_frontend_origin()],
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Accept", "Content-Type"],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=CORS_MAX_AGE,
    )

    # 注册异常映射
    app.add_exception_handler(MalformedEventError, _malformed_event_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StoreError, _store_error_handler)

    setup_logging()

    # 注册路由
    app.include_router(webhook.router, tags=["webhook"])
    app.include_router(users.router, tags=["users"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
