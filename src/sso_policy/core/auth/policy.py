"""
Authentication Policies

Declarative obligations the authentication engine must satisfy before a
transaction may succeed. Policies here only carry their configuration;
evaluating them against handler results happens elsewhere.

- AuthenticationPolicy: base obligation
- AuthenticationPolicySet: ordered, duplicate-free collection of obligations
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, Iterable, Iterator, Optional

from ...data.models.service import AuthenticationPolicyType

MASKED_VALUE = "******"


@dataclass(frozen=True)
class AuthenticationPolicy:
    """
    Base obligation.

    Instances are immutable and compare by type and fields, so two
    policies built from the same criteria are interchangeable.
    """
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.DEFAULT
    secret_fields: ClassVar[tuple] = ()

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary, masking secrets"""
        data: Dict[str, Any] = {"type": self.policy_type.value, "name": self.name}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in self.secret_fields and value is not None:
                value = MASKED_VALUE
            data[f.name] = value
        return data


@dataclass(frozen=True)
class AtLeastOneCredentialValidatedAuthenticationPolicy(AuthenticationPolicy):
    """At least one supplied credential must be validated by some handler"""
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.ANY_HANDLER

    # Keep trying the remaining handlers after one succeeds
    try_all: bool = False


@dataclass(frozen=True)
class AllAuthenticationHandlersSucceededAuthenticationPolicy(AuthenticationPolicy):
    """Every attempted authentication handler must succeed"""
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.ALL_HANDLERS


@dataclass(frozen=True)
class NotPreventedAuthenticationPolicy(AuthenticationPolicy):
    """No handler may report that authentication was prevented"""
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.NOT_PREVENTED


@dataclass(frozen=True)
class ScriptedAuthenticationPolicy(AuthenticationPolicy):
    """Outcome is decided by a script (inline body or script location)"""
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.SCRIPTED

    script: Optional[str] = None


@dataclass(frozen=True)
class RemoteCallAuthenticationPolicy(AuthenticationPolicy):
    """Outcome is decided by a remote endpoint, optionally with basic auth"""
    policy_type: ClassVar[AuthenticationPolicyType] = AuthenticationPolicyType.REMOTE_CALL
    secret_fields: ClassVar[tuple] = ("basic_auth_password",)

    url: Optional[str] = None
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = field(default=None, repr=False)


class AuthenticationPolicySet:
    """
    Ordered set of authentication policies.

    Iteration order is insertion order; adding an equal policy twice
    keeps the first position.
    """

    def __init__(self, policies: Optional[Iterable[AuthenticationPolicy]] = None):
        self._policies: Dict[AuthenticationPolicy, None] = {}
        for policy in policies or []:
            self.add(policy)

    def add(self, policy: AuthenticationPolicy) -> bool:
        """Add a policy; returns False if an equal policy is already present"""
        if policy in self._policies:
            return False
        self._policies[policy] = None
        return True

    def update(self, policies: Iterable[AuthenticationPolicy]) -> None:
        for policy in policies:
            self.add(policy)

    def first(self) -> Optional[AuthenticationPolicy]:
        return next(iter(self._policies), None)

    def to_list(self) -> list:
        return list(self._policies)

    def __iter__(self) -> Iterator[AuthenticationPolicy]:
        return iter(self._policies)

    def __len__(self) -> int:
        return len(self._policies)

    def __contains__(self, policy: object) -> bool:
        return policy in self._policies

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthenticationPolicySet):
            return NotImplemented
        return list(self._policies) == list(other._policies)

    def __repr__(self) -> str:
        return f"AuthenticationPolicySet({list(self._policies)!r})"
