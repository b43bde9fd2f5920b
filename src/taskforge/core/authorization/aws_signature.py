"""AWS Signature 凭证"""

from typing import Any

from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType
from .base import TaskAuthorizationMethod


class AWSSignatureAuthorization(TaskAuthorizationMethod):
    """AWS Signature 凭证，必填 accesskey + secretkey，原样输出"""

    method = AuthorizationMethodType.AWS_SIGNATURE

    def validate(self) -> dict[str, Any]:
        if not (
            self.authorization.get("accesskey") and self.authorization.get("secretkey")
        ):
            raise TaskValidationAuthError("AccessKey SecretKey format wrong!")
        self.credentials = dict(self.authorization)
        return self.credentials
