"""RequestContextMiddleware -- 请求级日志上下文

每个请求绑定 request_id（ULID）、method、path；/users/{userId}/... 额外绑定 user_id。
POST /webhook 解码后把 eventKey 写入 request.state.event_key，随 request_completed 一起记录。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

log = structlog.get_logger()


def extract_user_id(path: str) -> str | None:
    """从 /users/{userId}/... 中提取 userId，不匹配返回 None"""
    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "users" and parts[1]:
        return parts[1]
    return None


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        if user_id := extract_user_id(request.url.path):
            structlog.contextvars.bind_contextvars(user_id=user_id)

        # 路由与中间件共享同一个 scope["state"]
        request.state.event_key = None

        await log.ainfo("request_started")
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_failed",
                duration_ms=_elapsed_ms(started),
                event_key=request.state.event_key,
            )
            raise

        await log.ainfo(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            event_key=request.state.event_key,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
