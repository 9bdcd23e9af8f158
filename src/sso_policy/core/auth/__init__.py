"""
Authentication Policy Resolution

Decides which authentication policies a transaction must satisfy, based on
the configuration of the service being accessed.

Core concepts:
- AuthenticationTransaction: service reference + supplied credentials
- AuthenticationPolicy: declarative obligation checked later by the engine
- Resolver: maps a transaction to obligations, gated on SSO eligibility
- Resolution Plan: ordered pipeline of resolvers
"""

from .exceptions import UnauthorizedServiceException
from .transaction import (
    Service,
    Credential,
    UsernamePasswordCredential,
    AuthenticationTransaction,
)
from .policy import (
    AuthenticationPolicy,
    AtLeastOneCredentialValidatedAuthenticationPolicy,
    AllAuthenticationHandlersSucceededAuthenticationPolicy,
    NotPreventedAuthenticationPolicy,
    ScriptedAuthenticationPolicy,
    RemoteCallAuthenticationPolicy,
    AuthenticationPolicySet,
)
from .resolver import (
    AuthenticationPolicyResolver,
    RegisteredServiceAuthenticationPolicyResolver,
    build_policy,
)
from .plan import AuthenticationPolicyResolutionPlan

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
    "build_policy",
    "AuthenticationPolicyResolutionPlan",
]
