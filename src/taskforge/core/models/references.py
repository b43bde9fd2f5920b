"""引用值对象 -- 数据库记录 / 存储对象定位器

仅用于定位外部数据，不持有被引用对象。
必填定位字段（host / container）在构造时检查，缺失即抛 BadRequestError。
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from ..exceptions import BadRequestError
from .enums import StorageType

MONGODB = "mongodb"


class _Reference(BaseModel):
    """引用公共部分"""

    host: str | None = Field(default=None, description="主机信息")
    meta: dict[str, Any] | None = Field(default=None, description="附加信息")

    def set_meta(self, meta: dict[str, Any] | None):
        self.meta = meta
        return self

    def _meta_entry(self, key: str, value: Any) -> None:
        if self.meta is None:
            self.meta = {}
        self.meta[key] = value

    def to_json(self) -> dict[str, Any]:
        """JSON 形态，省略未设置字段"""
        return self.model_dump(mode="json", exclude_none=True)


# ============================================================
# 数据库引用
# ============================================================


class TaskDBRef(_Reference):
    """单条数据库记录引用"""

    id: Any = Field(default=None, description="记录 ID")
    identifier: Literal["dbref"] = "dbref"
    type: str | None = Field(default=None, description="数据库类型")
    database: str | None = Field(default=None, description="数据库名")
    source: str | None = Field(default=None, description="集合/表名")

    def set_database(self, database: str) -> "TaskDBRef":
        self.database = database
        return self

    def set_source(self, source: str) -> "TaskDBRef":
        self.source = source
        return self

    def set_id(self, id: Any) -> "TaskDBRef":
        self.id = id
        return self


class TaskMongoDBRef(TaskDBRef):
    type: str | None = MONGODB


class TaskBulkDBRef(TaskDBRef):
    """批量记录引用，保存有序 ID 序列"""

    id: list[Any] = Field(default_factory=list, description="记录 ID 列表")
    identifier: Literal["bulk_dbref"] = "bulk_dbref"  # type: ignore[assignment]

    def set_id(self, ids: list[Any]) -> "TaskBulkDBRef":
        self.id = list(ids)
        return self

    def add_id(self, id: Any) -> "TaskBulkDBRef":
        self.id.append(id)
        return self


class TaskBulkMongoDBRef(TaskBulkDBRef):
    type: str | None = MONGODB


# ============================================================
# 存储引用
# ============================================================


class TaskStorageRef(_Reference):
    """存储对象引用"""

    object: Any = Field(default=None, description="对象 key / 路径")
    identifier: Literal["storageref"] = "storageref"
    type: StorageType | None = Field(default=None, description="存储类型")
    container: str | None = Field(default=None, description="容器 / bucket")

    def set_container(self, container: str) -> "TaskStorageRef":
        self.container = container
        return self

    def set_object(self, object: Any) -> "TaskStorageRef":
        self.object = object
        return self


class TaskLocalStorageRef(TaskStorageRef):
    type: StorageType | None = StorageType.LOCAL


class TaskRemoteStorageRef(TaskStorageRef):
    type: StorageType | None = StorageType.REMOTE

    @model_validator(mode="after")
    def _require_host(self) -> "TaskRemoteStorageRef":
        if not self.host:
            raise BadRequestError(
                "Host is mandatory for Remote Storage Reference. "
                "Please provide the required host information."
            )
        return self


class TaskS3StorageRef(TaskStorageRef):
    type: StorageType | None = StorageType.S3

    @model_validator(mode="after")
    def _require_bucket(self) -> "TaskS3StorageRef":
        if not self.container:
            raise BadRequestError(
                "Bucket is mandatory for S3 Storage Reference. "
                "Please provide the required bucket/container information."
            )
        return self

    def set_region(self, region: str) -> "TaskS3StorageRef":
        self._meta_entry("region", region)
        return self


class TaskGCSStorageRef(TaskStorageRef):
    type: StorageType | None = StorageType.GCS

    @model_validator(mode="after")
    def _require_bucket(self) -> "TaskGCSStorageRef":
        if not self.container:
            raise BadRequestError(
                "Bucket is mandatory for GCS Storage Reference. "
                "Please provide the required bucket/container information."
            )
        return self


class TaskFTPStorageRef(TaskStorageRef):
    type: StorageType | None = StorageType.FTP

    @model_validator(mode="after")
    def _require_host(self) -> "TaskFTPStorageRef":
        if not self.host:
            raise BadRequestError(
                "Host is mandatory for FTP Storage Reference. "
                "Please provide the required host information."
            )
        return self

    def set_username(self, username: str) -> "TaskFTPStorageRef":
        self._meta_entry("username", username)
        return self

    def set_password(self, password: str) -> "TaskFTPStorageRef":
        self._meta_entry("password", password)
        return self

    def set_port(self, port: int) -> "TaskFTPStorageRef":
        self._meta_entry("port", port)
        return self
