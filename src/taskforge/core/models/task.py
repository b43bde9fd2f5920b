"""Task Domain Model -- 任务聚合根

Task 拥有 subtasks（组合关系，子任务生命周期绑定父任务），
childTaskOf / subtasksRef / dependencies 只保存 ID，不持有对象引用。
JSON/持久化形态使用 camelCase 字段名，标识字段为 _id。
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from ulid import ULID

from ..config import DEFAULT_TASK_NAME, DEFAULT_TASK_TYPE
from ..exceptions import TaskValidationError
from .enums import TERMINAL_STATES, TaskStatus
from .lenient import validate_lenient
from .payloads import TaskPayload

if TYPE_CHECKING:
    from ..store.protocols import TaskStore

log = structlog.get_logger()


def _new_task_id() -> str:
    return str(ULID())


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class Task(BaseModel):
    """Task 数据模型

    不变量：
    - subtask_count == len(subtasks)，has_child == (subtask_count > 0)
    - priority >= 1，max_attempts >= 1（setter 直接拒绝，不做截断）
    - progress 在 [0, 100] 内，越界输入被 setter 忽略
    - payload 为深拷贝快照
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(
        default_factory=_new_task_id,
        alias="_id",
        description="唯一标识，ULID 格式",
    )
    task_type: str = Field(default=DEFAULT_TASK_TYPE, description="任务类型")
    task_name: str = Field(default=DEFAULT_TASK_NAME, description="任务名称")
    status: TaskStatus = Field(default=TaskStatus.ENQUEUED, description="当前状态")

    # 子任务树
    subtasks: list["Task"] = Field(default_factory=list, description="子任务（组合）")
    subtasks_ref: list[str] = Field(default_factory=list, description="子任务 ID 索引")
    has_child: bool = Field(default=False, description="是否存在子任务（派生）")
    subtask_count: int = Field(default=0, description="子任务数量（派生）")
    child_task_of: str | None = Field(default=None, description="父任务 ID")

    payload: TaskPayload = Field(default_factory=TaskPayload, description="负载快照")

    # 执行控制
    is_complete: bool = Field(default=False, description="是否完成")
    progress: int = Field(default=0, ge=0, le=100, description="进度百分比 0-100")
    expires: datetime | None = Field(default=None, description="过期时间")
    max_attempts: int = Field(default=1, ge=1, description="最大尝试次数")
    attempts: int = Field(default=0, ge=0, description="已尝试次数")
    max_concurrency: int = Field(default=1, ge=1, description="最大并发数")
    immediate: bool = Field(default=False, description="是否立即执行")
    priority: int | float = Field(default=1, description="优先级，>= 1")
    dependencies: list[str] = Field(default_factory=list, description="依赖任务 ID")
    schedule: str | None = Field(
        default=None,
        description="cron 表达式，None 表示单次任务",
    )
    meta: dict[str, Any] | None = Field(default=None, description="附加元数据")
    result: dict[str, Any] | None = Field(default=None, description="执行结果")

    # 时间戳
    created_at: datetime = Field(default_factory=_utcnow, description="创建时间")
    updated_at: datetime = Field(default_factory=_utcnow, description="更新时间")
    scheduled_run_at: datetime | None = Field(default=None, description="计划运行时间")
    cancelled_at: datetime | None = Field(default=None, description="取消时间")
    enqueued_at: datetime | None = Field(default=None, description="入队时间")
    started_at: datetime | None = Field(default=None, description="开始执行时间")
    completed_at: datetime | None = Field(default=None, description="完成时间")

    @field_validator("priority")
    @classmethod
    def _priority_at_least_one(cls, value: int | float) -> int | float:
        if value < 1:
            raise ValueError("priority must be >= 1")
        return value

    def model_post_init(self, context: Any, /) -> None:
        if self.subtasks and not self.subtasks_ref:
            self.subtasks_ref = [subtask.id for subtask in self.subtasks]
        self._sync_children()

    def _sync_children(self) -> None:
        self.subtask_count = len(self.subtasks)
        self.has_child = self.subtask_count > 0

    def _touch(self) -> None:
        self.updated_at = _utcnow()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    # ============================================================
    # Setters
    # ============================================================

    def set_status(self, status: TaskStatus | str) -> "Task":
        """设置状态，仅接受 TaskStatus 封闭集合中的值

        Raises:
            TaskValidationError: 未知状态
        """
        try:
            self.status = TaskStatus(status)
        except (ValueError, TypeError) as e:
            raise TaskValidationError(f"Unknown task status: {status!r}.") from e
        self._touch()
        return self

    def set_task_type(self, task_type: str) -> "Task":
        if not isinstance(task_type, str) or not task_type:
            raise TaskValidationError("Task Type must be a non-empty string.")
        self.task_type = task_type
        self._touch()
        return self

    def set_task_name(self, task_name: str) -> "Task":
        self.task_name = task_name
        self._touch()
        return self

    def set_schedule(self, schedule: str | None) -> "Task":
        self.schedule = schedule
        self._touch()
        return self

    def set_parent_task(self, task_id: str | None) -> "Task":
        self.child_task_of = task_id
        self._touch()
        return self

    def set_immediate(self, flag: bool = True) -> "Task":
        self.immediate = flag
        self._touch()
        return self

    def set_meta(self, meta: dict[str, Any] | None) -> "Task":
        self.meta = meta
        self._touch()
        return self

    def set_priority(self, priority: int | float) -> "Task":
        if not _is_number(priority) or priority < 1:
            raise TaskValidationError(
                "Priority must be a number greater than or equal to 1."
            )
        self.priority = priority
        self._touch()
        return self

    def set_expires(self, expires: datetime) -> "Task":
        if not isinstance(expires, datetime):
            raise TaskValidationError("Expires must be a valid datetime object.")
        self.expires = expires
        self._touch()
        return self

    def set_max_attempts(self, max_attempts: int) -> "Task":
        if (
            not isinstance(max_attempts, int)
            or isinstance(max_attempts, bool)
            or max_attempts < 1
        ):
            raise TaskValidationError(
                "MaxAttempts must be a number greater than or equal to 1."
            )
        self.max_attempts = max_attempts
        self._touch()
        return self

    def set_progress(self, progress: int | float) -> "Task":
        """设置进度；越界或非数值输入直接忽略"""
        if _is_number(progress) and 0 <= progress <= 100:
            self.progress = int(progress)
            self._touch()
        return self

    # ============================================================
    # 组合
    # ============================================================

    def add_subtask(self, subtask: "Task") -> "Task":
        """追加子任务

        非 Task 实例被忽略（记录 warning）。
        """
        if not isinstance(subtask, Task):
            log.warning(
                "subtask_rejected",
                task_id=self.id,
                received_type=type(subtask).__name__,
            )
            return self
        subtask.set_parent_task(self.id)
        self.subtasks.append(subtask)
        self.subtasks_ref.append(subtask.id)
        self._sync_children()
        self._touch()
        return self

    def set_payload(self, payload: TaskPayload) -> "Task":
        """存储 payload 的深拷贝；非 TaskPayload 实例被忽略（记录 warning）"""
        if not isinstance(payload, TaskPayload):
            log.warning(
                "payload_rejected",
                task_id=self.id,
                received_type=type(payload).__name__,
            )
            return self
        self.payload = payload.model_copy(deep=True)
        self._touch()
        return self

    def get_payload(self) -> TaskPayload:
        return self.payload

    # ============================================================
    # 生命周期
    # ============================================================
    # 重复执行同一流转不会覆盖或清除已记录的时间戳

    def enqueue(self) -> "Task":
        self.status = TaskStatus.ENQUEUED
        if self.enqueued_at is None:
            self.enqueued_at = _utcnow()
        self._touch()
        return self

    def start(self) -> "Task":
        self.status = TaskStatus.RUNNING
        self.attempts += 1
        if self.started_at is None:
            self.started_at = _utcnow()
        self._touch()
        return self

    def schedule_run(self, at: datetime) -> "Task":
        if not isinstance(at, datetime):
            raise TaskValidationError("Scheduled run time must be a valid datetime.")
        self.scheduled_run_at = at
        self._touch()
        return self

    def cancel(self) -> "Task":
        self.status = TaskStatus.CANCELLED
        if self.cancelled_at is None:
            self.cancelled_at = _utcnow()
        self._touch()
        return self

    def set_complete(self) -> "Task":
        self.is_complete = True
        self.status = TaskStatus.COMPLETED
        self.progress = 100
        if self.completed_at is None:
            self.completed_at = _utcnow()
        self._touch()
        return self

    async def complete(self, store: "TaskStore") -> "Task":
        """递归完成任务及全部子任务，再交由持久化协作方保存

        Args:
            store: 外部 TaskStore 实现

        Returns:
            store.save_task() 返回的 Task
        """
        self._complete_tree()
        log.info("task_completed", task_id=self.id, subtask_count=self.subtask_count)
        return await store.save_task(self)

    def _complete_tree(self) -> None:
        for subtask in self.subtasks:
            subtask._complete_tree()
        self.set_complete()

    # ============================================================
    # 序列化
    # ============================================================

    def to_json(self) -> dict[str, Any]:
        """JSON 形态（camelCase + _id，时间为 ISO 字符串）"""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> "Task":
        """从 JSON 形态重建完整对象图

        反序列化是全量容错的：缺失、falsy（空容器除外）或未通过字段约束的值
        取构造默认值，嵌套子任务递归重建，字符串形式的子任务视为 ID 引用。
        has_child / subtask_count 始终由 subtasks 重新计算。
        """
        data = dict(data or {})

        subtasks: list[Task] = []
        refs: list[str] = []
        for entry in data.pop("subtasks", None) or []:
            if isinstance(entry, Task):
                subtasks.append(entry)
            elif isinstance(entry, Mapping):
                subtasks.append(cls.from_json(entry))
            elif entry:
                refs.append(str(entry))

        for derived in ("hasChild", "has_child", "subtaskCount", "subtask_count"):
            data.pop(derived, None)

        raw_payload = data.pop("payload", None)
        if isinstance(raw_payload, TaskPayload):
            payload = raw_payload.model_copy(deep=True)
        elif isinstance(raw_payload, Mapping):
            payload = TaskPayload.from_json(raw_payload)
        else:
            payload = TaskPayload()

        # 显式给出的空容器保留，其余 falsy 值取默认
        values = {
            key: value
            for key, value in data.items()
            if value or isinstance(value, Mapping | list)
        }
        refs_key = "subtasks_ref" if "subtasks_ref" in values else "subtasksRef"
        if not values.get(refs_key):
            values[refs_key] = [subtask.id for subtask in subtasks] + refs

        task = validate_lenient(
            cls, {**values, "subtasks": subtasks, "payload": payload}
        )
        task._sync_children()
        return task
