"""配置常量与环境变量覆盖测试"""

import pytest
from taskforge.core.config import (
    DEFAULT_BEARER_TOKEN_TTL_S,
    DEFAULT_PRIVATE_KEY_EXPIRES_IN_S,
    get_bearer_token_ttl,
    get_private_key_expires_in,
)


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TASKFORGE_BEARER_TOKEN_TTL_S", raising=False)
        monkeypatch.delenv("TASKFORGE_PRIVATE_KEY_EXPIRES_IN_S", raising=False)
        assert get_bearer_token_ttl() == DEFAULT_BEARER_TOKEN_TTL_S == 1800
        assert get_private_key_expires_in() == DEFAULT_PRIVATE_KEY_EXPIRES_IN_S == 300

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TASKFORGE_BEARER_TOKEN_TTL_S", "600")
        monkeypatch.setenv("TASKFORGE_PRIVATE_KEY_EXPIRES_IN_S", "45")
        assert get_bearer_token_ttl() == 600
        assert get_private_key_expires_in() == 45

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_value_falls_back(self, monkeypatch, value):
        """非法值降级为默认值"""
        monkeypatch.setenv("TASKFORGE_BEARER_TOKEN_TTL_S", value)
        assert get_bearer_token_ttl() == DEFAULT_BEARER_TOKEN_TTL_S
