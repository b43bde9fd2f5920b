"""TaskAuthorizationMethod -- 凭证校验抽象接口

每个具体类型把一种异构、可能不完整的用户输入规范化为 canonical credentials，
或抛出 TaskValidationAuthError。validate() 是输入的纯函数，可重复调用。
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType


class TaskAuthorizationMethod(ABC):
    """凭证校验基类

    Attributes:
        method: 判别值（AuthorizationMethodType）
        authorization: 原始输入
        credentials: validate() 成功后的规范化凭证，未校验时为 None
    """

    method: ClassVar[AuthorizationMethodType]

    def __init__(self, authorization: Mapping[str, Any] | None) -> None:
        if authorization is not None and not isinstance(authorization, Mapping):
            raise TaskValidationAuthError(
                f"Authorization for {self.method} must be an object."
            )
        self.authorization: dict[str, Any] = dict(authorization or {})
        self.credentials: dict[str, Any] | None = None

    @property
    def is_valid(self) -> bool:
        """是否已成功校验"""
        return self.credentials is not None

    @abstractmethod
    def validate(self) -> dict[str, Any]:
        """校验并返回 canonical credentials

        Raises:
            TaskValidationAuthError: 凭证格式错误
        """
        ...

    def __repr__(self) -> str:
        # 不输出凭证内容
        return f"{type(self).__name__}(method={self.method.value!r}, valid={self.is_valid})"


def coalesce(value: Any, default: Any) -> Any:
    """value 为 None 时返回 default（空字符串等 falsy 值保留）"""
    return default if value is None else value
