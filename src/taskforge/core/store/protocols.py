"""Store Protocol 接口定义

持久化由外部协作方实现，本包只定义结构化子类型（duck typing）接口。
"""

from typing import Protocol

from ..models.task import Task


class TaskStore(Protocol):
    """Task 存储接口

    实现方需支持把 subtasks / dependencies / childTaskOf
    存为同一集合内的 ID 引用（见 schema.task_to_document）。
    """

    async def save_task(self, task: Task) -> Task:
        """保存任务（新建或覆盖），返回持久化后的 Task"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        ...
