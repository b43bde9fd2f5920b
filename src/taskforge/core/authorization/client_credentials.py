"""OAuth2 Client Credentials 凭证

proof-of-possession 三选一，优先级固定：
client_assertion > client_secret > private_key_path
仅复制被选中模式的字段。
"""

from typing import Any

from ..config import get_private_key_expires_in
from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType
from .base import TaskAuthorizationMethod

CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"

# 可选透传字段
_OPTIONAL_FIELDS = ("scope", "additional_parameters")


class ClientCredentialsAuthorization(TaskAuthorizationMethod):
    """Client Credentials 凭证

    必填: client_id, token_endpoint
    可选: scope, additional_parameters
    三选一: client_assertion / client_secret / private_key_path（+ expires_in）
    """

    method = AuthorizationMethodType.CLIENT_CREDENTIALS

    def validate(self) -> dict[str, Any]:
        auth = self.authorization

        if not auth.get("client_id"):
            raise TaskValidationAuthError(
                "Client ID Missing: The required client ID is not provided. "
                "Please include the client ID to authenticate and proceed with "
                "the operation."
            )
        credentials: dict[str, Any] = {"client_id": auth["client_id"]}

        for field in _OPTIONAL_FIELDS:
            if auth.get(field):
                credentials[field] = auth[field]

        if not auth.get("token_endpoint"):
            raise TaskValidationAuthError(
                "Token Endpoint Missing: The required Token Endpoint is not "
                "provided. Please include the Token Endpoint to authenticate and "
                "proceed with the operation."
            )
        credentials["token_endpoint"] = auth["token_endpoint"]

        if auth.get("client_assertion"):
            credentials["client_assertion"] = auth["client_assertion"]
            credentials["client_assertion_type"] = CLIENT_ASSERTION_TYPE
        elif auth.get("client_secret"):
            credentials["client_secret"] = auth["client_secret"]
        elif auth.get("private_key_path"):
            credentials["private_key_path"] = auth["private_key_path"]
            credentials["expires_in"] = (
                auth.get("expires_in") or get_private_key_expires_in()
            )
        else:
            raise TaskValidationAuthError(
                "Client Secret, Client Assertion, or Private Key Path Needed: To "
                "authenticate and access the requested resource, you need to "
                "provide either a valid client secret, a client assertion, or the "
                "path to a private key."
            )

        self.credentials = credentials
        return self.credentials
