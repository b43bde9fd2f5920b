"""配置常量模块 -- 可通过环境变量覆盖

包含凭证默认有效期、Payload 版本号、Task 默认值等可配置常量。
"""

import os

import structlog

log = structlog.get_logger()

# Bearer token 未提供 expires_at 时的默认有效期（秒）
DEFAULT_BEARER_TOKEN_TTL_S: int = 30 * 60

# private_key_path 模式下 client assertion 的默认有效期（秒）
DEFAULT_PRIVATE_KEY_EXPIRES_IN_S: int = 300

# TaskPayload 结构版本
PAYLOAD_VERSION: int = 2

# Task 构造默认值
DEFAULT_TASK_TYPE: str = "main"
DEFAULT_TASK_NAME: str = "task"


def _get_int_env(env_var: str, default: int) -> int:
    """读取正整数环境变量，非法值降级为默认值"""
    val = os.environ.get(env_var)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        parsed = 0
    if parsed <= 0:
        log.warning(
            "invalid_int_config",
            env_var=env_var,
            raw_value=val,
            fallback=default,
        )
        # 使用默认值，不阻塞校验流程
        return default
    return parsed


def get_bearer_token_ttl() -> int:
    """获取 Bearer token 默认有效期（秒）"""
    return _get_int_env("TASKFORGE_BEARER_TOKEN_TTL_S", DEFAULT_BEARER_TOKEN_TTL_S)


def get_private_key_expires_in() -> int:
    """获取 private_key_path 模式默认 expires_in（秒）"""
    return _get_int_env(
        "TASKFORGE_PRIVATE_KEY_EXPIRES_IN_S",
        DEFAULT_PRIVATE_KEY_EXPIRES_IN_S,
    )
