"""taskforge Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    TERMINAL_STATES,
    AuthorizationMethodType,
    MessageType,
    StorageType,
    TaskStatus,
    is_valid_status,
)
from .message import TaskErrorMessage, TaskMessage, TaskWarningMessage
from .payloads import TaskPayload, TaskPayloadMeta
from .references import (
    TaskBulkDBRef,
    TaskBulkMongoDBRef,
    TaskDBRef,
    TaskFTPStorageRef,
    TaskGCSStorageRef,
    TaskLocalStorageRef,
    TaskMongoDBRef,
    TaskRemoteStorageRef,
    TaskS3StorageRef,
    TaskStorageRef,
)
from .task import Task

__all__ = [
    # 枚举
    "TaskStatus",
    "AuthorizationMethodType",
    "MessageType",
    "StorageType",
    "TERMINAL_STATES",
    "is_valid_status",
    # Task
    "Task",
    # Payload
    "TaskPayload",
    "TaskPayloadMeta",
    # Message
    "TaskMessage",
    "TaskWarningMessage",
    "TaskErrorMessage",
    # References
    "TaskDBRef",
    "TaskMongoDBRef",
    "TaskBulkDBRef",
    "TaskBulkMongoDBRef",
    "TaskStorageRef",
    "TaskLocalStorageRef",
    "TaskRemoteStorageRef",
    "TaskS3StorageRef",
    "TaskGCSStorageRef",
    "TaskFTPStorageRef",
]
