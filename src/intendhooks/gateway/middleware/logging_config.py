"""日志输出配置

structlog 事件与标准库 logging（uvicorn、aiosqlite）共用同一个 ProcessorFormatter，
dev 模式彩色控制台，json 模式每行一个 JSON 对象，异常展开为结构化 traceback。
RequestContextMiddleware 已为每个请求记录 request_completed，uvicorn.access 降到 WARNING。
"""

import logging

import structlog
from intendhooks.core.config import get_log_format, get_log_level

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    if log_format == "json":
        tail = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        tail = [structlog.dev.ConsoleRenderer()]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *tail],
    )


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """配置 structlog + 根 logger

    Args:
        log_format: "dev" 或 "json"，默认取 INTENDHOOKS_LOG_FORMAT
        log_level: 日志级别名，默认取 INTENDHOOKS_LOG_LEVEL；未知级别按 INFO
    """
    log_format = log_format or get_log_format()
    level = logging.getLevelNamesMapping().get((log_level or get_log_level()).upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(_formatter(log_format))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))
