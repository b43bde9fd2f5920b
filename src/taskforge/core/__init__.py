"""taskforge Core -- 任务数据模型与凭证校验层

包的公开接口导出。
"""

# 凭证校验
from .authorization import (
    AUTHORIZATION_METHODS,
    APIKeyAuthorization,
    AWSSignatureAuthorization,
    BearerTokenAuthorization,
    ClientCredentialsAuthorization,
    TaskAuthorizationMethod,
    create_authorization,
)

# 构建器
from .creator import TaskCreator

# 异常
from .exceptions import (
    BadRequestError,
    TaskforgeError,
    TaskValidationAuthError,
    TaskValidationError,
)

# 数据模型
from .models import (
    AuthorizationMethodType,
    Task,
    TaskBulkDBRef,
    TaskBulkMongoDBRef,
    TaskDBRef,
    TaskErrorMessage,
    TaskFTPStorageRef,
    TaskGCSStorageRef,
    TaskLocalStorageRef,
    TaskMessage,
    TaskMongoDBRef,
    TaskPayload,
    TaskPayloadMeta,
    TaskRemoteStorageRef,
    TaskS3StorageRef,
    TaskStatus,
    TaskStorageRef,
    TaskWarningMessage,
)
from .logging_config import setup_logging
from .store import TASK_DOCUMENT_SCHEMA, TaskStore, task_to_document
from .worker import TaskWorker

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPayload",
    "TaskPayloadMeta",
    "TaskCreator",
    "TaskWorker",
    "TaskStore",
    "TASK_DOCUMENT_SCHEMA",
    "task_to_document",
    "AuthorizationMethodType",
    "AUTHORIZATION_METHODS",
    "TaskAuthorizationMethod",
    "APIKeyAuthorization",
    "AWSSignatureAuthorization",
    "BearerTokenAuthorization",
    "ClientCredentialsAuthorization",
    "create_authorization",
    "TaskMessage",
    "TaskWarningMessage",
    "TaskErrorMessage",
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
    "TaskforgeError",
    "TaskValidationError",
    "TaskValidationAuthError",
    "BadRequestError",
    "setup_logging",
]
