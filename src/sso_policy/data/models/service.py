"""
Registered Service Models

Service definitions as stored in the service registry:
- RegisteredService: the service record matched against inbound service ids
- RegisteredServiceAccessStrategy: whether the service may use SSO
- RegisteredServiceAuthenticationPolicy: the policy criteria attached to a service
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthenticationPolicyType(str, Enum):
    """Kind of authentication obligation a service asks for."""
    DEFAULT = "DEFAULT"              # No explicit obligation
    ANY_HANDLER = "ANY_HANDLER"      # At least one credential validated
    ALL_HANDLERS = "ALL_HANDLERS"    # Every handler must succeed
    NOT_PREVENTED = "NOT_PREVENTED"  # No handler reported a prevented error
    SCRIPTED = "SCRIPTED"            # Script decides
    REMOTE_CALL = "REMOTE_CALL"      # Remote endpoint decides


class AuthenticationPolicyCriteria(BaseModel):
    """
    Declarative description of the obligation a service requires.

    Unrecognized type strings are kept as plain strings so they can be told
    apart from DEFAULT; they never produce a policy.
    """
    model_config = ConfigDict(frozen=True)

    type: Union[AuthenticationPolicyType, str] = Field(
        default=AuthenticationPolicyType.DEFAULT,
        union_mode="left_to_right",
    )
    try_all: bool = False
    script: Optional[str] = None
    url: Optional[str] = None
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = Field(default=None, repr=False)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if value is None:
            return AuthenticationPolicyType.DEFAULT
        if isinstance(value, str) and not isinstance(value, AuthenticationPolicyType):
            return value.strip().upper()
        return value

    @property
    def is_default(self) -> bool:
        return self.type == AuthenticationPolicyType.DEFAULT


class RegisteredServiceAuthenticationPolicy(BaseModel):
    """Authentication policy configuration attached to a registered service."""
    model_config = ConfigDict(frozen=True)

    criteria: Optional[AuthenticationPolicyCriteria] = None


class RegisteredServiceAccessStrategy(BaseModel):
    """Access rules for a registered service."""
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    sso_enabled: bool = True

    def is_service_access_allowed(self) -> bool:
        """Check if the service may be used at all"""
        return self.enabled

    def is_sso_allowed(self) -> bool:
        """Check if the service may take part in single sign-on"""
        return self.enabled and self.sso_enabled


class RegisteredService(BaseModel):
    """
    A service definition held by the service registry.

    `service_id` is a regular expression that must fully match the
    canonical service identifier.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    service_id: str
    description: str = ""
    evaluation_order: int = 0
    access_strategy: RegisteredServiceAccessStrategy = Field(
        default_factory=RegisteredServiceAccessStrategy
    )
    authentication_policy: RegisteredServiceAuthenticationPolicy = Field(
        default_factory=RegisteredServiceAuthenticationPolicy
    )

    @field_validator("service_id")
    @classmethod
    def _validate_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid service id pattern '{value}': {e}") from e
        return value

    def matches(self, service_id: Optional[str]) -> bool:
        """Check whether a canonical service identifier belongs to this service"""
        if not service_id:
            return False
        return re.fullmatch(self.service_id, service_id) is not None
