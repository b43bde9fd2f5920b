"""API Key 凭证"""

from typing import Any

from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType
from .base import TaskAuthorizationMethod, coalesce

DEFAULT_ADD_TO = "header"


class APIKeyAuthorization(TaskAuthorizationMethod):
    """API Key 凭证

    必填: key, value
    可选: addTo（默认 "header"）
    """

    method = AuthorizationMethodType.API_KEY

    def validate(self) -> dict[str, Any]:
        if not (self.authorization.get("key") and self.authorization.get("value")):
            raise TaskValidationAuthError("API Key format wrong!")
        self.credentials = {
            **self.authorization,
            "addTo": coalesce(self.authorization.get("addTo"), DEFAULT_ADD_TO),
        }
        return self.credentials
