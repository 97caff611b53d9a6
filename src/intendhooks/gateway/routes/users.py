"""用户任务路由

GET  /users/{userId}/tasks: 用户任务列表，按 updated_at 倒序
GET  /users/{userId}/currentTask: 当前任务或 null
POST /users/{userId}/tasks/{taskName}/speedRating: 设置速度评分（body 为 32 位整数）
POST /users/{userId}/tasks/{taskName}/message: 设置留言（body 为字符串）
"""

from fastapi import APIRouter, Body, Depends
from intendhooks.core.models import SPEED_RATING_MAX, SPEED_RATING_MIN, Task, TaskNotFound
from starlette.responses import JSONResponse

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


def _task_not_found(result: TaskNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": {
                "code": "TASK_NOT_FOUND",
                "message": f"Task '{result.task_name}' does not exist",
            }
        },
    )


@router.get("/users/{user_id}/tasks", response_model=list[Task])
async def list_user_tasks(
    user_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询用户任务列表（不含 message / speed_rating）"""
    return await service.list_user_tasks(user_id)


@router.get("/users/{user_id}/currentTask", response_model=Task | None)
async def get_current_task(
    user_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询用户当前任务，没有时返回 null"""
    return await service.get_current_task(user_id)


@router.post("/users/{user_id}/tasks/{task_name}/speedRating", response_model=Task)
async def update_speed_rating(
    user_id: str,
    task_name: str,
    speed_rating: int = Body(
        strict=True,
        ge=SPEED_RATING_MIN,
        le=SPEED_RATING_MAX,
        description="速度评分（严格整数，不接受布尔、浮点或字符串）",
    ),
    service: TaskService = Depends(get_task_service),
):
    """设置任务速度评分，任务不存在返回 404"""
    result = await service.update_speed_rating(task_name, speed_rating)
    if isinstance(result, TaskNotFound):
        return _task_not_found(result)
    return result


@router.post("/users/{user_id}/tasks/{task_name}/message", response_model=Task)
async def update_message(
    user_id: str,
    task_name: str,
    message: str = Body(description="留言内容"),
    service: TaskService = Depends(get_task_service),
):
    """设置任务留言，任务不存在返回 404"""
    result = await service.update_message(user_id, task_name, message)
    if isinstance(result, TaskNotFound):
        return _task_not_found(result)
    return result
