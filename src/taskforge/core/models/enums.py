"""枚举定义

包含 TaskStatus 封闭状态集、AuthorizationMethodType 凭证判别值、
MessageType、StorageType，以及 TERMINAL_STATES 终态集合。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态（封闭枚举），初始值 ENQUEUED"""

    ENQUEUED = "enqueued"
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    PAUSED = "paused"
    WAITING = "waiting"
    DELAYED = "delayed"
    ERROR = "error"
    PARTIAL = "partial"


TERMINAL_STATES: set[TaskStatus] = {
    TaskStatus.COMPLETED,
    TaskStatus.FAILED,
    TaskStatus.CANCELLED,
    TaskStatus.ERROR,
}


class AuthorizationMethodType(StrEnum):
    """凭证类型判别值 -- authorization 注册表的 key"""

    API_KEY = "api-key"
    AWS_SIGNATURE = "aws-signature"
    BEARER_TOKEN = "bearer-token"
    CLIENT_CREDENTIALS = "client-credentials"


class MessageType(StrEnum):
    """Task 消息类型"""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StorageType(StrEnum):
    """存储引用类型"""

    LOCAL = "local"
    REMOTE = "remote"
    S3 = "s3"
    GCS = "gcs"
    FTP = "ftp"


def is_valid_status(status: object) -> bool:
    """判断值是否属于 TaskStatus 封闭集合"""
    try:
        TaskStatus(status)
    except (ValueError, TypeError):
        return False
    return True
