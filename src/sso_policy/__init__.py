"""
SSO Policy Resolver

Resolves, for an authentication attempt, which authentication policies must
hold before the attempt may succeed, using the policy criteria configured on
the registered service being accessed.
"""

__version__ = "0.1.0"

from .core.auth import (
    UnauthorizedServiceException,
    Service,
    Credential,
    UsernamePasswordCredential,
    AuthenticationTransaction,
    AuthenticationPolicy,
    AtLeastOneCredentialValidatedAuthenticationPolicy,
    AllAuthenticationHandlersSucceededAuthenticationPolicy,
    NotPreventedAuthenticationPolicy,
    ScriptedAuthenticationPolicy,
    RemoteCallAuthenticationPolicy,
    AuthenticationPolicySet,
    AuthenticationPolicyResolver,
    RegisteredServiceAuthenticationPolicyResolver,
    AuthenticationPolicyResolutionPlan,
)
from .core.services import ServiceSelectionPlan
from .data import (
    AuthenticationPolicyType,
    AuthenticationPolicyCriteria,
    RegisteredService,
    ServiceDirectory,
    InMemoryServiceRegistry,
)

__all__ = [
    "UnauthorizedServiceException",
    "Service",
    "Credential",
    "UsernamePasswordCredential",
    "AuthenticationTransaction",
    "AuthenticationPolicy",
    "AtLeastOneCredentialValidatedAuthenticationPolicy",
    "AllAuthenticationHandlersSucceededAuthenticationPolicy",
    "NotPreventedAuthenticationPolicy",
    "ScriptedAuthenticationPolicy",
    "RemoteCallAuthenticationPolicy",
    "AuthenticationPolicySet",
    "AuthenticationPolicyResolver",
    "RegisteredServiceAuthenticationPolicyResolver",
    "AuthenticationPolicyResolutionPlan",
    "ServiceSelectionPlan",
    "AuthenticationPolicyType",
    "AuthenticationPolicyCriteria",
    "RegisteredService",
    "ServiceDirectory",
    "InMemoryServiceRegistry",
]
