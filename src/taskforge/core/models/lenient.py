"""宽松反序列化

持久化文档可能来自旧版本或被外部修改。未通过字段约束的值被丢弃，
对应字段回落到构造默认值，而不是让整个文档反序列化失败。
"""

from collections.abc import Mapping
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ..exceptions import TaskValidationError

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_alias(model_cls: type[BaseModel], key: str) -> str | None:
    field = model_cls.model_fields.get(key)
    return field.alias if field is not None else None


def validate_lenient(model_cls: type[ModelT], values: Mapping[str, Any]) -> ModelT:
    """校验 values，丢弃未通过校验的顶层键后重试

    Raises:
        TaskValidationError: 错误无法归因到任何输入键（模型级错误）
    """
    values = dict(values)
    while True:
        try:
            return model_cls.model_validate(values)
        except ValidationError as e:
            invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
            dropped = [
                key
                for key in values
                if key in invalid or _field_alias(model_cls, key) in invalid
            ]
            if not dropped:
                raise TaskValidationError(
                    f"Invalid {model_cls.__name__} document: {e}"
                ) from e
            log.warning(
                "invalid_fields_dropped",
                model=model_cls.__name__,
                fields=dropped,
            )
            for key in dropped:
                del values[key]
