"""全局 pytest 配置 -- 内存 TaskStore + 常用配置 fixture"""

import time
from typing import Any

import pytest
from taskforge.core.models import Task
from taskforge.core.store import task_to_document


class InMemoryTaskStore:
    """TaskStore 的内存实现

    documents 保存持久化文档形态（子任务为 ID 引用），
    snapshots 保存完整 JSON 形态供 get_task 重建。
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.snapshots: dict[str, dict[str, Any]] = {}
        self.save_calls = 0

    async def save_task(self, task: Task) -> Task:
        self.save_calls += 1
        self.documents[task.id] = task_to_document(task)
        self.snapshots[task.id] = task.to_json()
        return task

    async def get_task(self, task_id: str) -> Task | None:
        snapshot = self.snapshots.get(task_id)
        if snapshot is None:
            return None
        return Task.from_json(snapshot)


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """空的内存 TaskStore"""
    return InMemoryTaskStore()


@pytest.fixture
def api_key_auth() -> dict[str, Any]:
    """api-key 原始凭证（含 method 判别值）"""
    return {"method": "api-key", "key": "X-Api-Key", "value": "secret-123"}


@pytest.fixture
def bearer_auth() -> dict[str, Any]:
    """未过期的 bearer-token 原始凭证"""
    return {
        "method": "bearer-token",
        "access_token": "tok-abc",
        "expires_at": int(time.time()) + 3600,
    }


@pytest.fixture
def task_config(api_key_auth: dict[str, Any]) -> dict[str, Any]:
    """完整合法的 TaskCreator 配置"""
    return {
        "task_type": "crm.sync",
        "task_name": "nightly-sync",
        "priority": 3,
        "max_attempts": 5,
        "payload": {
            "body": {"account_id": "acc-1", "objects": ["contact", "deal"]},
            "authorization": api_key_auth,
            "meta": {"source": "scheduler"},
            "storage": {"type": "s3", "container": "exports"},
        },
    }
