"""Data models for registered services."""

from .service import (
    AuthenticationPolicyType,
    AuthenticationPolicyCriteria,
    RegisteredServiceAuthenticationPolicy,
    RegisteredServiceAccessStrategy,
    RegisteredService,
)

__all__ = [
    "AuthenticationPolicyType",
    "AuthenticationPolicyCriteria",
    "RegisteredServiceAuthenticationPolicy",
    "RegisteredServiceAccessStrategy",
    "RegisteredService",
]
