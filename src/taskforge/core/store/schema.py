"""持久化文档 Schema 描述

只描述外部存储的文档形态，Task 的字段集合必须与之保持兼容。
subtasks / dependencies / childTaskOf 以 ID 引用同一集合（ref="Task"）。
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from ..models.task import Task

FieldType = Literal["string", "number", "boolean", "date", "object", "array"]


class SchemaField(BaseModel):
    """单个文档字段描述"""

    type: FieldType = Field(description="字段类型")
    required: bool = Field(default=False, description="是否必填")
    default: Any = Field(default=None, description="默认值")
    ref: str | None = Field(default=None, description="引用的集合（ID 引用）")
    items: FieldType | None = Field(default=None, description="数组元素类型")


TASK_DOCUMENT_SCHEMA: dict[str, SchemaField] = {
    "taskType": SchemaField(type="string", required=True),
    "taskName": SchemaField(type="string", default="task"),
    "subtasks": SchemaField(type="array", items="string", ref="Task"),
    "hasChild": SchemaField(type="boolean", default=False),
    "subtaskCount": SchemaField(type="number", default=0),
    "payload": SchemaField(type="object"),
    "isComplete": SchemaField(type="boolean", default=False),
    "progress": SchemaField(type="number", default=0),
    "expires": SchemaField(type="date"),
    "maxAttempts": SchemaField(type="number", default=1),
    "attempts": SchemaField(type="number", default=0),
    "maxConcurrency": SchemaField(type="number", default=1),
    "childTaskOf": SchemaField(type="string", ref="Task"),
    "immediate": SchemaField(type="boolean", default=False),
    "priority": SchemaField(type="number", default=1),
    "status": SchemaField(type="string", default="enqueued"),
    "result": SchemaField(type="object"),
    "dependencies": SchemaField(type="array", items="string", ref="Task"),
    "schedule": SchemaField(type="string"),
    "meta": SchemaField(type="object"),
    "scheduledRunAt": SchemaField(type="date"),
    "cancelledAt": SchemaField(type="date"),
    "enqueuedAt": SchemaField(type="date"),
    "startedAt": SchemaField(type="date"),
    "completedAt": SchemaField(type="date"),
}


def missing_document_fields(task: Task) -> set[str]:
    """返回 schema 中存在但 Task JSON 形态缺失的字段（兼容时为空集）"""
    return set(TASK_DOCUMENT_SCHEMA) - set(task.to_json())


def task_to_document(task: Task) -> dict[str, Any]:
    """把 Task 转为持久化文档

    子任务以 ID 引用存储，只保留 schema 字段与 _id。
    """
    data = task.to_json()
    document = {key: data[key] for key in TASK_DOCUMENT_SCHEMA if key in data}
    document["_id"] = task.id
    document["subtasks"] = [subtask.id for subtask in task.subtasks]
    return document
