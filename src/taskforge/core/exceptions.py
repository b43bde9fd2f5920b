"""taskforge Core 异常体系

三类错误，每类携带稳定的状态码（HTTPStatus），
调用方按 code/kind 映射传输层状态码，无需匹配 message 文本。
"""

from http import HTTPStatus
from typing import Any


class TaskforgeError(Exception):
    """Core 包基础异常"""

    code: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        """
        Args:
            message: 面向用户的错误描述
        """
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        """错误类别（类名），稳定可比较"""
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """结构化错误表示"""
        return {
            "error": self.kind,
            "code": int(self.code),
            "message": self.message,
        }


class TaskValidationError(TaskforgeError):
    """任务构造输入不合法（Task 字段、Payload、Creator 配置）"""

    code = HTTPStatus.BAD_REQUEST


class TaskValidationAuthError(TaskforgeError):
    """凭证格式错误或 token 已过期

    所有 authorization validator 只抛出此异常。
    """

    code = HTTPStatus.UNAUTHORIZED


class BadRequestError(TaskforgeError):
    """通用 bad request，用于 authorization 路径之外（如引用类型构造）"""

    code = HTTPStatus.BAD_REQUEST
