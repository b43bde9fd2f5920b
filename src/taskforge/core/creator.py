"""TaskCreator -- 任务构建与校验

校验顺序固定、fail-fast，首个错误即抛出（不聚合）：
1. task_type 必填
2. 应用任务级可选字段（各 setter 自带校验）
3. payload 必填
4. authorization：复用已校验对象，或按 method 分派到对应校验器
5. meta：复用已校验对象，或直接透传
6. storage：有则附加
7. body 必填
8. task.set_payload()
校验成功后结果被缓存，重复调用直接返回同一个 Task。

同一实例不支持并发调用 validate()。
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic.alias_generators import to_camel

from .authorization import TaskAuthorizationMethod, create_authorization
from .exceptions import BadRequestError, TaskValidationAuthError, TaskValidationError
from .models.payloads import TaskPayload, TaskPayloadMeta
from .models.references import TaskDBRef, TaskStorageRef
from .models.task import Task
from .store.protocols import TaskStore

log = structlog.get_logger()


class TaskCreator:
    """任务构建器

    config 键可用 snake_case 或 camelCase：
    task_type（必填）、task_name、immediate、expires、priority、
    max_attempts、schedule、payload（必填）。
    """

    def __init__(self, config: Mapping[str, Any]) -> None:
        if not isinstance(config, Mapping):
            raise BadRequestError("Task configuration must be an object.")
        self._config = dict(config)
        self.task = Task()
        self.payload: TaskPayload | None = None
        self._validated = False

    def _get(self, name: str) -> Any:
        """按 snake_case / camelCase 读取配置项"""
        for key in (name, to_camel(name)):
            if key in self._config:
                return self._config[key]
        return None

    def add_subtask(self, task: Task) -> "TaskCreator":
        """追加已构造的子任务到根任务

        Raises:
            BadRequestError: 参数不是 Task 实例
        """
        if not isinstance(task, Task):
            raise BadRequestError("Only Task instances can be added as subtasks.")
        self.task.add_subtask(task)
        return self

    def validate(self) -> Task:
        """校验配置并构建 Task

        Returns:
            构建完成的 Task（重复调用返回同一实例）

        Raises:
            TaskValidationError: 任务字段或 payload 不合法
            TaskValidationAuthError: 凭证不合法
        """
        if self._validated:
            return self.task

        self._apply_task_fields()

        raw_payload = self._get("payload")
        if not raw_payload:
            raise TaskValidationError("Task Payload is missing from the request.")

        payload = TaskPayload()
        payload.set_authorization(
            self._resolve_authorization(_payload_field(raw_payload, "authorization"))
        )
        payload.set_meta(self._resolve_meta(_payload_field(raw_payload, "meta")))
        payload.set_storage(
            self._resolve_storage(_payload_field(raw_payload, "storage"))
        )
        payload.set_body(self._resolve_body(_payload_field(raw_payload, "body")))

        self.task.set_payload(payload)
        self.payload = payload
        self._validated = True

        log.info(
            "task_validated",
            task_id=self.task.id,
            task_type=self.task.task_type,
            auth_method=payload.authorization.get("method"),
            subtask_count=self.task.subtask_count,
        )
        return self.task

    async def create(self, store: TaskStore) -> Task:
        """校验后交由外部持久化协作方保存

        Args:
            store: TaskStore 实现

        Returns:
            store.save_task() 返回的 Task

        Raises:
            TaskValidationError / TaskValidationAuthError: 校验失败
            Exception: 持久化协作方抛出的任何错误原样传播
        """
        task = self.validate()
        saved = await store.save_task(task)
        log.info("task_created", task_id=saved.id, task_type=saved.task_type)
        return saved

    # ============================================================
    # 校验步骤
    # ============================================================

    def _apply_task_fields(self) -> None:
        task_type = self._get("task_type")
        if not task_type:
            raise TaskValidationError(
                "Task Type is mandatory and missing from the request."
            )
        self.task.set_task_type(task_type)

        if task_name := self._get("task_name"):
            self.task.set_task_name(task_name)
        if (immediate := self._get("immediate")) is not None:
            self.task.set_immediate(immediate)
        if expires := self._get("expires"):
            self.task.set_expires(expires)
        if (priority := self._get("priority")) is not None:
            self.task.set_priority(priority)
        if (max_attempts := self._get("max_attempts")) is not None:
            self.task.set_max_attempts(max_attempts)
        if schedule := self._get("schedule"):
            self.task.set_schedule(schedule)

    def _resolve_authorization(self, raw: Any) -> dict[str, Any]:
        if not raw:
            return {}
        if isinstance(raw, TaskAuthorizationMethod):
            method = raw
        elif isinstance(raw, Mapping):
            fields = dict(raw)
            method = create_authorization(fields.pop("method", None), fields)
        else:
            raise TaskValidationAuthError("Authorization must be an object.")

        credentials = method.credentials if method.is_valid else method.validate()
        log.debug(
            "authorization_resolved",
            task_id=self.task.id,
            method=method.method.value,
        )
        return {"method": method.method.value, **credentials}

    @staticmethod
    def _resolve_meta(raw: Any) -> dict[str, Any]:
        if not raw:
            return {}
        if isinstance(raw, TaskPayloadMeta):
            return dict(raw.values) if raw.is_valid else raw.validate_meta()
        if isinstance(raw, Mapping):
            return dict(raw)
        raise TaskValidationError("Payload meta must be an object.")

    @staticmethod
    def _resolve_storage(raw: Any) -> dict[str, Any]:
        if not raw:
            return {}
        if isinstance(raw, TaskDBRef | TaskStorageRef):
            return raw.to_json()
        if isinstance(raw, Mapping):
            return dict(raw)
        raise TaskValidationError("Payload storage must be an object.")

    @staticmethod
    def _resolve_body(raw: Any) -> dict[str, Any]:
        if not raw:
            raise TaskValidationError(
                "Payload body is missing. "
                "A valid payload body is required to create a task."
            )
        if not isinstance(raw, Mapping):
            raise TaskValidationError("Payload body must be an object.")
        return dict(raw)


def _payload_field(raw_payload: Any, name: str) -> Any:
    """从 payload（mapping 或 TaskPayload）读取子文档"""
    if isinstance(raw_payload, TaskPayload):
        return getattr(raw_payload, name)
    if isinstance(raw_payload, Mapping):
        return raw_payload.get(name)
    raise TaskValidationError("Task Payload must be an object.")
