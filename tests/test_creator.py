"""TaskCreator 单元测试

测试内容：
1. 正常构建：任务字段、payload、authorization 规范化
2. fail-fast 校验顺序
3. 复用已校验的 authorization / meta 对象
4. 幂等 validate
5. create() 与外部 TaskStore 协作
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest
from taskforge.core.authorization import (
    APIKeyAuthorization,
    BearerTokenAuthorization,
)
from taskforge.core.creator import TaskCreator
from taskforge.core.exceptions import (
    BadRequestError,
    TaskValidationAuthError,
    TaskValidationError,
)
from taskforge.core.models import (
    Task,
    TaskPayload,
    TaskPayloadMeta,
    TaskS3StorageRef,
)


class TestValidate:
    """正常构建"""

    def test_full_config(self, task_config):
        task = TaskCreator(task_config).validate()

        assert isinstance(task, Task)
        assert task.task_type == "crm.sync"
        assert task.task_name == "nightly-sync"
        assert task.priority == 3
        assert task.max_attempts == 5
        assert task.payload.body == {"account_id": "acc-1", "objects": ["contact", "deal"]}
        assert task.payload.authorization == {
            "method": "api-key",
            "key": "X-Api-Key",
            "value": "secret-123",
            "addTo": "header",
        }
        assert task.payload.meta == {"source": "scheduler"}
        assert task.payload.storage == {"type": "s3", "container": "exports"}

    def test_camel_case_keys(self):
        task = TaskCreator(
            {
                "taskType": "report",
                "taskName": "weekly",
                "maxAttempts": 2,
                "payload": {"body": {"week": 42}},
            }
        ).validate()
        assert task.task_type == "report"
        assert task.task_name == "weekly"
        assert task.max_attempts == 2

    def test_minimal_config(self):
        """authorization / meta / storage 可缺省"""
        task = TaskCreator({"task_type": "ping", "payload": {"body": {"n": 1}}}).validate()
        assert task.payload.authorization == {}
        assert task.payload.meta == {}
        assert task.payload.storage == {}
        assert task.priority == 1

    def test_optional_task_fields(self):
        expires = datetime(2031, 1, 1, tzinfo=UTC)
        task = TaskCreator(
            {
                "task_type": "etl",
                "immediate": True,
                "expires": expires,
                "schedule": "0 3 * * *",
                "payload": {"body": {"a": 1}},
            }
        ).validate()
        assert task.immediate is True
        assert task.expires == expires
        assert task.schedule == "0 3 * * *"

    def test_payload_instance_accepted(self):
        payload = TaskPayload().set_body({"q": "x"}).set_meta({"trace": "t-1"})
        task = TaskCreator({"task_type": "search", "payload": payload}).validate()
        assert task.payload.body == {"q": "x"}
        assert task.payload.meta == {"trace": "t-1"}

    def test_bearer_authorization(self, bearer_auth):
        task = TaskCreator(
            {"task_type": "fetch", "payload": {"body": {"u": 1}, "authorization": bearer_auth}}
        ).validate()
        assert task.payload.authorization["method"] == "bearer-token"
        assert task.payload.authorization["token_type"] == "Bearer"
        assert task.payload.authorization["expires_at"] == bearer_auth["expires_at"]

    def test_storage_reference(self):
        ref = TaskS3StorageRef(object="exports/a.csv", container="bucket-1").set_region(
            "us-east-1"
        )
        task = TaskCreator(
            {"task_type": "export", "payload": {"body": {"a": 1}, "storage": ref}}
        ).validate()
        assert task.payload.storage == {
            "object": "exports/a.csv",
            "identifier": "storageref",
            "type": "s3",
            "container": "bucket-1",
            "meta": {"region": "us-east-1"},
        }

    def test_payload_is_snapshot(self, task_config):
        """validate 之后修改原始 body 不影响 Task"""
        task = TaskCreator(task_config).validate()
        task_config["payload"]["body"]["objects"].append("company")
        assert task.payload.body["objects"] == ["contact", "deal"]

    def test_invalid_config_type(self):
        with pytest.raises(BadRequestError):
            TaskCreator(["task_type", "x"])  # type: ignore[arg-type]


class TestValidationOrder:
    """fail-fast 校验顺序"""

    def test_missing_task_type_checked_before_authorization(self, task_config):
        """task_type 缺失时不会触发任何凭证校验"""
        del task_config["task_type"]
        creator = TaskCreator(task_config)

        with patch.object(APIKeyAuthorization, "validate") as mock_validate:
            with pytest.raises(TaskValidationError, match="Task Type is mandatory"):
                creator.validate()

        mock_validate.assert_not_called()
        assert creator.payload is None

    def test_invalid_priority_before_missing_payload(self):
        with pytest.raises(TaskValidationError, match="Priority"):
            TaskCreator({"task_type": "x", "priority": 0}).validate()

    def test_invalid_max_attempts(self):
        with pytest.raises(TaskValidationError, match="MaxAttempts"):
            TaskCreator(
                {"task_type": "x", "max_attempts": 0, "payload": {"body": {"a": 1}}}
            ).validate()

    def test_invalid_expires(self):
        with pytest.raises(TaskValidationError, match="Expires"):
            TaskCreator(
                {"task_type": "x", "expires": "2031-01-01", "payload": {"body": {"a": 1}}}
            ).validate()

    def test_missing_payload(self):
        with pytest.raises(TaskValidationError, match="Task Payload is missing"):
            TaskCreator({"task_type": "x"}).validate()

    def test_missing_body_with_valid_authorization(self, api_key_auth):
        """凭证合法但 body 缺失仍然失败"""
        creator = TaskCreator(
            {"task_type": "x", "payload": {"authorization": api_key_auth}}
        )
        with pytest.raises(TaskValidationError, match="Payload body is missing"):
            creator.validate()

    def test_invalid_authorization_before_body(self):
        with pytest.raises(TaskValidationAuthError, match="API Key format wrong!"):
            TaskCreator(
                {"task_type": "x", "payload": {"authorization": {"method": "api-key"}}}
            ).validate()

    def test_unknown_authorization_method(self):
        with pytest.raises(TaskValidationAuthError, match="Unsupported"):
            TaskCreator(
                {
                    "task_type": "x",
                    "payload": {"body": {"a": 1}, "authorization": {"method": "ntlm"}},
                }
            ).validate()

    def test_authorization_without_method(self):
        with pytest.raises(TaskValidationAuthError, match="missing"):
            TaskCreator(
                {
                    "task_type": "x",
                    "payload": {"body": {"a": 1}, "authorization": {"key": "k", "value": "v"}},
                }
            ).validate()

    def test_body_must_be_mapping(self):
        with pytest.raises(TaskValidationError):
            TaskCreator({"task_type": "x", "payload": {"body": ["a"]}}).validate()

    def test_failed_validate_can_retry(self):
        """失败后不缓存结果，修正配置后可重新校验"""
        creator = TaskCreator({"task_type": "x"})
        with pytest.raises(TaskValidationError):
            creator.validate()
        creator._config["payload"] = {"body": {"a": 1}}
        assert creator.validate().payload.body == {"a": 1}


class TestPrevalidatedObjects:
    """复用已校验对象"""

    def test_validated_authorization_not_revalidated(self, bearer_auth):
        auth = BearerTokenAuthorization(
            {k: v for k, v in bearer_auth.items() if k != "method"}
        )
        auth.validate()

        with patch.object(BearerTokenAuthorization, "validate") as mock_validate:
            task = TaskCreator(
                {"task_type": "x", "payload": {"body": {"a": 1}, "authorization": auth}}
            ).validate()

        mock_validate.assert_not_called()
        assert task.payload.authorization == {"method": "bearer-token", **auth.credentials}

    def test_unvalidated_authorization_instance_is_validated(self):
        auth = APIKeyAuthorization({"key": "k", "value": "v"})
        task = TaskCreator(
            {"task_type": "x", "payload": {"body": {"a": 1}, "authorization": auth}}
        ).validate()
        assert auth.is_valid is True
        assert task.payload.authorization["addTo"] == "header"

    def test_validated_meta_reused(self):
        meta = TaskPayloadMeta(values={"tenant": "t-1"})
        meta.validate_meta()
        task = TaskCreator(
            {"task_type": "x", "payload": {"body": {"a": 1}, "meta": meta}}
        ).validate()
        assert task.payload.meta == {"tenant": "t-1"}

    def test_unvalidated_meta_is_validated(self):
        meta = TaskPayloadMeta(values={"tenant": "t-1"})
        TaskCreator(
            {"task_type": "x", "payload": {"body": {"a": 1}, "meta": meta}}
        ).validate()
        assert meta.is_valid is True

    def test_invalid_meta(self):
        meta = TaskPayloadMeta(values={"handle": object()})
        with pytest.raises(TaskValidationError):
            TaskCreator(
                {"task_type": "x", "payload": {"body": {"a": 1}, "meta": meta}}
            ).validate()


class TestIdempotency:
    """重复 validate"""

    def test_returns_same_task(self, task_config):
        creator = TaskCreator(task_config)
        first = creator.validate()
        second = creator.validate()
        assert first is second
        assert creator.payload is not None

    def test_authorization_validated_once(self, task_config):
        creator = TaskCreator(task_config)
        with patch.object(
            APIKeyAuthorization,
            "validate",
            autospec=True,
            side_effect=APIKeyAuthorization.validate,
        ) as mock_validate:
            creator.validate()
            creator.validate()
        assert mock_validate.call_count == 1


class TestSubtasks:
    """子任务"""

    def test_add_subtask(self, task_config):
        creator = TaskCreator(task_config)
        child = Task(task_type="crm.sync.contacts")
        creator.add_subtask(child)

        task = creator.validate()
        assert task.subtask_count == 1
        assert task.has_child is True
        assert child.child_task_of == task.id

    def test_add_subtask_rejects_non_task(self, task_config):
        with pytest.raises(BadRequestError):
            TaskCreator(task_config).add_subtask({"task_type": "child"})  # type: ignore[arg-type]


class TestCreate:
    """create() 与 TaskStore 协作"""

    async def test_create_saves_task(self, task_config, task_store):
        creator = TaskCreator(task_config)
        task = await creator.create(task_store)

        assert task is creator.task
        assert task_store.save_calls == 1
        assert task.id in task_store.documents

        stored = await task_store.get_task(task.id)
        assert stored is not None
        assert stored.task_type == "crm.sync"
        assert stored.payload.authorization["addTo"] == "header"

    async def test_validation_error_skips_store(self):
        store = AsyncMock()
        with pytest.raises(TaskValidationError):
            await TaskCreator({"payload": {"body": {"a": 1}}}).create(store)
        store.save_task.assert_not_called()

    async def test_store_error_propagates(self, task_config):
        store = AsyncMock()
        store.save_task.side_effect = RuntimeError("connection refused")
        with pytest.raises(RuntimeError, match="connection refused"):
            await TaskCreator(task_config).create(store)
