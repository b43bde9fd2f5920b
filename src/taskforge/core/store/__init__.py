"""taskforge Core Store -- 持久化协作方接口与文档 Schema"""

from .protocols import TaskStore
from .schema import (
    TASK_DOCUMENT_SCHEMA,
    SchemaField,
    missing_document_fields,
    task_to_document,
)

__all__ = [
    "TaskStore",
    "TASK_DOCUMENT_SCHEMA",
    "SchemaField",
    "missing_document_fields",
    "task_to_document",
]
