"""Webhook 接收路由

POST /webhook: 接收外部应用事件，按 eventKey 解码后交给 EventService。
未识别的 eventKey 返回 {"task": null, "user": null}。
解码出的 eventKey 记入 request.state，由 RequestContextMiddleware 写进请求日志。
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from intendhooks.core.models import UpdateResponse, decode_event

from ..deps import get_event_service
from ..services.event_service import EventService

router = APIRouter()


@router.post("/webhook", response_model=UpdateResponse)
async def receive_webhook(
    request: Request,
    payload: Any = Body(description="webhook 事件 JSON"),
    service: EventService = Depends(get_event_service),
):
    """解码事件并执行对应的状态更新

    - eventKey 缺失或 payload 不合法返回 400
    - 存储失败返回 500
    """
    event = decode_event(payload)
    request.state.event_key = str(event.event_key)
    return await service.process_event(event)
