"""structlog 配置模块

凭证字段在渲染前统一脱敏，任何 event 都不会输出 token / secret 原文。
渲染模式：dev（控制台可读输出）/ json（结构化输出）。
"""

import logging
import os
from collections.abc import Mapping
from typing import Any

import structlog

# 凭证输入与 canonical credentials 中的敏感字段
SENSITIVE_KEYS = frozenset(
    {
        "value",
        "secretkey",
        "access_token",
        "refresh_token",
        "client_secret",
        "client_assertion",
        "private_key_path",
        "password",
    }
)
REDACTED = "***"


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: REDACTED if key in SENSITIVE_KEYS else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [_redact(item) for item in value]
    return value


def redact_credentials(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor：递归替换敏感字段的值"""
    return _redact(event_dict)


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    参数缺省时读取 TASKFORGE_LOG_FORMAT / TASKFORGE_LOG_LEVEL：
    - "json": 结构化 JSON 输出
    - "dev" (默认): 控制台可读输出
    """
    log_format = log_format or os.environ.get("TASKFORGE_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TASKFORGE_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_credentials,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

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
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
