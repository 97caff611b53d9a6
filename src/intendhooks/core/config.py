"""配置常量模块 -- 可通过环境变量覆盖

包含 .env 加载、数据库路径、CORS 来源、监听地址、日志输出以及番茄钟计数策略。
核心服务不直接读取环境变量，由 gateway lifespan 加载后注入。
"""

import os
from pathlib import Path

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, Field

log = structlog.get_logger()

_LOG_FORMATS = ("dev", "json")


def load_env_file(path: str | Path | None = None) -> str | None:
    """加载 .env 文件（只在入口调用一次）

    已存在的环境变量优先，不会被 .env 覆盖。文件不存在时什么也不做。

    Args:
        path: .env 路径，默认取 INTENDHOOKS_ENV_FILE，再默认当前目录 .env

    Returns:
        实际加载的文件路径；未加载返回 None
    """
    env_path = Path(path or os.environ.get("INTENDHOOKS_ENV_FILE", ".env"))
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return str(env_path)


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("INTENDHOOKS_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 文档库路径"""
    return os.environ.get(
        "INTENDHOOKS_DB_PATH",
        str(_get_base_dir() / "sqlite" / "intendhooks.db"),
    )


def get_frontend_origin() -> str:
    """获取允许跨域访问的前端来源"""
    return os.environ.get("FRONTEND_ORIGIN", "http://localhost:3000")


def get_bind_host() -> str:
    return os.environ.get("INTENDHOOKS_HOST", "127.0.0.1")


def get_bind_port() -> int:
    val = os.environ.get("INTENDHOOKS_PORT", "8000")
    try:
        return int(val)
    except ValueError:
        log.warning("invalid_port_config", env_var="INTENDHOOKS_PORT", value=val, fallback=8000)
        return 8000


def get_log_format() -> str:
    """日志渲染模式：dev（默认）或 json"""
    val = os.environ.get("INTENDHOOKS_LOG_FORMAT", "dev").strip().lower()
    if val not in _LOG_FORMATS:
        log.warning("invalid_log_config", env_var="INTENDHOOKS_LOG_FORMAT", value=val, fallback="dev")
        return "dev"
    return val


def get_log_level() -> str:
    return os.environ.get("INTENDHOOKS_LOG_LEVEL", "INFO").strip().upper()


# CORS 预检缓存时间（秒）
CORS_MAX_AGE: int = 3600


class PomodoroPolicy(BaseModel):
    """番茄钟计数策略

    默认值保持线上既有行为：
    - 任务切换时 pomodoro_spent 归零
    - 未知用户第一次完成番茄钟记为 0

    环境变量:
        INTENDHOOKS_RESET_POMODORO_ON_TASK_CHANGE: 任务切换时是否归零（默认 true）
        INTENDHOOKS_FIRST_POMODORO_COUNT: 新用户首次完成番茄钟时的计数（默认 0）
    """

    reset_on_task_change: bool = Field(
        default=True,
        description="任务切换时是否将 pomodoro_spent 归零",
    )
    first_pomodoro_count: int = Field(
        default=0,
        ge=0,
        description="未知用户首次 timer end 写入的计数",
    )


def _parse_bool(val: str) -> bool | None:
    lowered = val.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


def load_pomodoro_policy() -> PomodoroPolicy:
    """从环境变量加载番茄钟计数策略

    无效值记录 warning 并回退默认值，不阻塞启动。
    """
    kwargs: dict = {}

    if val := os.environ.get("INTENDHOOKS_RESET_POMODORO_ON_TASK_CHANGE"):
        parsed = _parse_bool(val)
        if parsed is None:
            log.warning(
                "invalid_policy_config",
                env_var="INTENDHOOKS_RESET_POMODORO_ON_TASK_CHANGE",
                value=val,
                fallback=True,
            )
        else:
            kwargs["reset_on_task_change"] = parsed

    if val := os.environ.get("INTENDHOOKS_FIRST_POMODORO_COUNT"):
        try:
            count = int(val)
        except ValueError:
            count = -1
        if count < 0:
            log.warning(
                "invalid_policy_config",
                env_var="INTENDHOOKS_FIRST_POMODORO_COUNT",
                value=val,
                fallback=0,
            )
        else:
            kwargs["first_pomodoro_count"] = count

    return PomodoroPolicy(**kwargs)
