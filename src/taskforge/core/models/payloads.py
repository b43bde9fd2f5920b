"""TaskPayload -- 任务负载

body / authorization / storage / meta 四个子文档 + version。
纯 setter 构建器，不做内容校验（校验由 TaskCreator 负责）。
"""

import warnings
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from ..config import PAYLOAD_VERSION
from ..exceptions import TaskValidationError
from .lenient import validate_lenient

_JSON_VALUES = TypeAdapter(dict[str, Any])


class TaskPayload(BaseModel):
    """Task 负载

    所有 setter 忽略 falsy 输入（no-op，不报错）。
    authentication 是 authorization 的废弃别名，仅为向后兼容保留。
    """

    body: dict[str, Any] = Field(default_factory=dict, description="任务主体数据")
    authorization: dict[str, Any] = Field(
        default_factory=dict,
        description="规范化凭证（或原始 authorization map）",
    )
    authentication: dict[str, Any] = Field(
        default_factory=dict,
        description="已废弃，等价于 authorization",
    )
    storage: dict[str, Any] = Field(default_factory=dict, description="存储引用信息")
    meta: dict[str, Any] = Field(default_factory=dict, description="附加元数据")
    version: int = Field(default=PAYLOAD_VERSION, description="Payload 结构版本")

    @model_validator(mode="before")
    @classmethod
    def _legacy_authentication(cls, data: Any) -> Any:
        # 旧版本只写 authentication
        if isinstance(data, Mapping):
            data = {k: v for k, v in data.items() if v is not None}
            if data.get("authentication") and not data.get("authorization"):
                data["authorization"] = data["authentication"]
        return data

    def set_body(self, body: dict[str, Any] | None) -> "TaskPayload":
        if body:
            self.body = body
        return self

    def set_authentication(
        self, authentication: dict[str, Any] | None
    ) -> "TaskPayload":
        """设置 authentication

        .. deprecated::
            请改用 ``set_authorization``，此方法将在 3.0 移除。
        """
        warnings.warn(
            "set_authentication 已废弃，请使用 set_authorization 替代。",
            DeprecationWarning,
            stacklevel=2,
        )
        if authentication:
            self.authentication = authentication
        return self.set_authorization(authentication)

    def set_authorization(
        self, authorization: dict[str, Any] | None
    ) -> "TaskPayload":
        if authorization:
            self.authorization = authorization
        return self

    def set_storage(self, storage: dict[str, Any] | None) -> "TaskPayload":
        if storage:
            self.storage = storage
        return self

    def set_meta(self, meta: dict[str, Any] | None) -> "TaskPayload":
        if meta:
            self.meta = meta
        return self

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> "TaskPayload":
        """从 JSON 形态重建，缺失字段全部取默认值"""
        if not data:
            return cls()
        return validate_lenient(cls, {k: v for k, v in data.items() if v})


class TaskPayloadMeta(BaseModel):
    """可预校验的 Payload 元数据

    TaskCreator 遇到 is_valid 的实例直接复用其 values。
    """

    values: dict[Any, Any] = Field(default_factory=dict, description="元数据键值")
    validated: bool = Field(default=False, description="是否已通过校验")

    @property
    def is_valid(self) -> bool:
        return self.validated

    def validate_meta(self) -> dict[str, Any]:
        """校验元数据可持久化（key 为字符串，value 可 JSON 序列化）

        Raises:
            TaskValidationError: 存在非字符串 key 或不可序列化的 value
        """
        for key in self.values:
            if not isinstance(key, str):
                raise TaskValidationError(
                    f"Payload meta keys must be strings, got {type(key).__name__}."
                )
        try:
            _JSON_VALUES.dump_python(self.values, mode="json")
        except ValueError as e:
            raise TaskValidationError(
                f"Payload meta is not JSON serializable: {e}"
            ) from e
        self.validated = True
        return dict(self.values)
