"""
Data layer for the policy resolver.

Contains registered service models and the service directory
implementations they are stored in.
"""

from .models import (
    AuthenticationPolicyType,
    AuthenticationPolicyCriteria,
    RegisteredServiceAuthenticationPolicy,
    RegisteredServiceAccessStrategy,
    RegisteredService,
)
from .repos import ServiceDirectory, InMemoryServiceRegistry

__all__ = [
    "AuthenticationPolicyType",
    "AuthenticationPolicyCriteria",
    "RegisteredServiceAuthenticationPolicy",
    "RegisteredServiceAccessStrategy",
    "RegisteredService",
    "ServiceDirectory",
    "InMemoryServiceRegistry",
]
