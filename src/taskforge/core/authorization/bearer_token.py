"""Bearer Token 凭证

expires_at 为 epoch 秒；未提供时默认 now + TTL（默认 1800 秒）。
构造候选凭证后做过期检查：expires_at <= now 视为过期。
过期检查是值比较，不是实时计时器。
"""

import time
from typing import Any

from ..config import get_bearer_token_ttl
from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType
from .base import TaskAuthorizationMethod, coalesce

DEFAULT_TOKEN_TYPE = "Bearer"


class BearerTokenAuthorization(TaskAuthorizationMethod):
    """Bearer Token 凭证

    必填: access_token
    可选: expires_at（默认 now + TTL）、token_type（默认 "Bearer"）
    """

    method = AuthorizationMethodType.BEARER_TOKEN

    def validate(self) -> dict[str, Any]:
        access_token = self.authorization.get("access_token")
        if not access_token:
            raise TaskValidationAuthError("Valid access token missing!")

        now = int(time.time())
        expires_at = self.authorization.get("expires_at")
        if expires_at is None:
            expires_at = now + get_bearer_token_ttl()

        candidate = {
            **self.authorization,
            "access_token": access_token,
            "expires_at": expires_at,
            "token_type": coalesce(
                self.authorization.get("token_type"), DEFAULT_TOKEN_TYPE
            ),
        }
        if self._is_expired(expires_at, now):
            raise TaskValidationAuthError(
                "TokenSet Expired: The authentication token associated with your "
                "request has expired. Please reauthenticate to continue using the "
                "service. Make sure to obtain a fresh token before attempting to "
                "access protected resources."
            )
        self.credentials = candidate
        return self.credentials

    @staticmethod
    def _is_expired(expires_at: Any, now: int) -> bool:
        try:
            return float(expires_at) <= now
        except (TypeError, ValueError) as e:
            raise TaskValidationAuthError(
                "Token expires_at must be epoch seconds."
            ) from e
