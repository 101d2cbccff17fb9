"""
Structlog 日志配置模块

每条日志都带上 service/version/environment，便于多实例部署时检索。
grpc 库自身的标准库日志单独控制级别（settings.GRPC_LOG_LEVEL）。
"""
import logging
import json
import structlog
from structlog.processors import TimeStamper, add_log_level, JSONRenderer
from structlog.dev import ConsoleRenderer
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter
from typing import Any, Dict, List

from core.config import settings


# Loggers used by grpcio for its own diagnostics
GRPC_LOGGER_NAMES = ("grpc", "grpc._cython.cygrpc", "grpc.aio")


def add_service_context(_logger: Any, _method: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """把服务标识写入每条日志（调用方显式传入的字段优先）。"""
    event_dict.setdefault("service", settings.PROJECT_NAME)
    event_dict.setdefault("version", settings.VERSION)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def get_renderer() -> Any:
    """DEBUG 下使用彩色控制台输出，其余环境输出单行 JSON。"""
    if settings.DEBUG:
        return ConsoleRenderer(colors=True)

    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)
    return JSONRenderer(serializer=_dumps)


def grpc_log_level() -> int:
    """grpc 库日志级别；无法识别的名称回退到 WARNING。"""
    level = logging.getLevelName(settings.GRPC_LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging() -> None:
    """配置 structlog，并让标准库日志（含 grpc）共用同一处理链。"""
    shared_pre_chain: List[Any] = [
        merge_contextvars,
        add_log_level,
        add_service_context,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    # grpc 的 DEBUG 日志非常多，默认只保留 WARNING 及以上
    for name in GRPC_LOGGER_NAMES:
        logging.getLogger(name).setLevel(grpc_log_level())


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取 structlog logger 实例。"""
    return structlog.get_logger(name)


# 初始化配置
configure_logging()
