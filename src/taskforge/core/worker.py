"""TaskWorker -- 任务执行方基类

外部 worker 系统继承此类实现 run()；本包不包含调度/分发循环。
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from .models.enums import TaskStatus, is_valid_status
from .models.payloads import TaskPayload
from .models.task import Task

log = structlog.get_logger()


class TaskWorker(ABC):
    """任务执行方基类

    对 Task 的读取与状态更新全部委托给被包装的 Task。
    """

    def __init__(self, task: Task) -> None:
        self.task = task

    def get_task_id(self) -> str:
        return self.task.id

    def get_payload(self) -> TaskPayload:
        return self.task.get_payload()

    def get_parent_task_id(self) -> str | None:
        return self.task.child_task_of

    def has_child_task(self) -> bool:
        return self.task.has_child

    def set_progress(self, progress: int | float) -> None:
        """越界进度被忽略"""
        self.task.set_progress(progress)

    def set_complete(self) -> None:
        self.task.set_complete()

    def set_status(self, status: Any) -> None:
        """更新状态；不属于 TaskStatus 的值被忽略并记录 warning"""
        if not is_valid_status(status):
            log.warning("worker_status_ignored", task_id=self.task.id, status=status)
            return
        self.task.set_status(TaskStatus(status))

    @abstractmethod
    async def run(self) -> Any:
        """执行任务逻辑，由子类实现"""
        ...
