"""TaskMessage -- 任务执行过程中产出的消息信封

worker 通过 identifier="message" 识别此类信封。
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from .enums import MessageType


class TaskMessage(BaseModel):
    """Task 消息"""

    message: str = Field(description="消息内容")
    identifier: Literal["message"] = "message"
    type: MessageType | None = Field(default=None, description="消息类型")
    meta: dict[str, Any] | None = Field(default=None, description="附加元数据")

    def set_meta(self, meta: dict[str, Any] | None) -> "TaskMessage":
        self.meta = meta
        return self


class TaskWarningMessage(TaskMessage):
    type: MessageType | None = MessageType.WARNING


class TaskErrorMessage(TaskMessage):
    type: MessageType | None = MessageType.ERROR
