"""taskforge Core Authorization -- 凭证校验子系统

AuthorizationMethodType 是封闭判别值集合，AUTHORIZATION_METHODS 为每个成员
注册一个 TaskAuthorizationMethod 实现。
"""

from collections.abc import Mapping
from typing import Any

from ..exceptions import TaskValidationAuthError
from ..models.enums import AuthorizationMethodType
from .api_key import APIKeyAuthorization
from .aws_signature import AWSSignatureAuthorization
from .base import TaskAuthorizationMethod
from .bearer_token import BearerTokenAuthorization
from .client_credentials import CLIENT_ASSERTION_TYPE, ClientCredentialsAuthorization

AUTHORIZATION_METHODS: dict[AuthorizationMethodType, type[TaskAuthorizationMethod]] = {
    AuthorizationMethodType.API_KEY: APIKeyAuthorization,
    AuthorizationMethodType.AWS_SIGNATURE: AWSSignatureAuthorization,
    AuthorizationMethodType.BEARER_TOKEN: BearerTokenAuthorization,
    AuthorizationMethodType.CLIENT_CREDENTIALS: ClientCredentialsAuthorization,
}


def create_authorization(
    method: AuthorizationMethodType | str | None,
    authorization: Mapping[str, Any] | None,
) -> TaskAuthorizationMethod:
    """按判别值构造凭证校验器

    Args:
        method: 凭证类型判别值
        authorization: 原始凭证输入（不含 method 字段）

    Raises:
        TaskValidationAuthError: method 缺失或不受支持
    """
    if not method:
        raise TaskValidationAuthError("Authorization method is missing.")
    try:
        method_type = AuthorizationMethodType(method)
    except ValueError as e:
        raise TaskValidationAuthError(
            f"Unsupported authorization method: {method!r}."
        ) from e
    return AUTHORIZATION_METHODS[method_type](authorization)


__all__ = [
    "AUTHORIZATION_METHODS",
    "CLIENT_ASSERTION_TYPE",
    "APIKeyAuthorization",
    "AWSSignatureAuthorization",
    "BearerTokenAuthorization",
    "ClientCredentialsAuthorization",
    "TaskAuthorizationMethod",
    "create_authorization",
]
