"""structlog 配置模块

Gateway 与 Deploy Webhook 两个应用共用此配置：
- TASKFLOW_LOG_FORMAT=json 输出结构化 JSON，否则输出可读的控制台格式
- TASKFLOW_LOG_LEVEL 控制根 logger 级别
- 事件中的令牌、口令类字段在渲染前统一替换为掩码
- uvicorn 访问日志不再输出，请求日志由 LoggingMiddleware 的 request_completed 负责

Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制，未开启或初始化失败时只写本地日志。
"""

import logging
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED = "***"

# 小写比较；命中即掩码，无论值的类型
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"authorization", "token", "password", "secret", "api_key", "cookie"}
)
_SENSITIVE_SUFFIXES = ("_token", "_secret", "_password")

# 由 LoggingMiddleware 接管的 uvicorn logger
SILENCED_LOGGERS = ("uvicorn.access",)


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return lowered in SENSITIVE_KEYS or lowered.endswith(_SENSITIVE_SUFFIXES)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog 处理器：掩码敏感字段（含一层嵌套的 dict，如 headers）"""
    for key, value in event_dict.items():
        if _is_sensitive(key):
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if isinstance(k, str) and _is_sensitive(k) else v
                for k, v in value.items()
            }
    return event_dict


def build_shared_processors() -> list[structlog.types.Processor]:
    """structlog 与标准库 logging 共用的处理器链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_secrets,
    ]


def _select_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def _install_root_handler(
    shared_processors: list[structlog.types.Processor],
    renderer: structlog.types.Processor,
    level_name: str,
) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    for name in SILENCED_LOGGERS:
        silenced = logging.getLogger(name)
        silenced.handlers.clear()
        silenced.propagate = False


def setup_logging() -> None:
    """初始化 structlog，并让标准库 logging（uvicorn 等）走同一渲染器"""
    shared_processors = build_shared_processors()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _install_root_handler(
        shared_processors,
        _select_renderer(os.environ.get("TASKFLOW_LOG_FORMAT", "dev")),
        os.environ.get("TASKFLOW_LOG_LEVEL", "INFO"),
    )


def setup_logfire(app=None) -> None:
    """按 LOGFIRE_SEND_TO_LOGFIRE 可选启用 Logfire（需安装 logfire extra 与 LOGFIRE_TOKEN）"""
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure()
        if app is not None:
            logfire.instrument_fastapi(app)
    except Exception:
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire 初始化失败，降级为纯本地日志",
        )
