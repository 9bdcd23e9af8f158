"""
Authentication Transaction

An inbound request to authenticate a principal against a service:
- Service: the target application reference
- Credential: what the principal supplied (password, token, ...)
- AuthenticationTransaction: service + credentials, immutable
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Service:
    """
    Reference to the application a principal is authenticating to.

    `id` is usually the service URL as presented by the client.
    """
    id: str
    original_url: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def of(cls, service_id: str, **attributes) -> "Service":
        return cls(id=service_id, original_url=service_id, attributes=attributes)


@dataclass(frozen=True)
class Credential:
    """Base credential supplied by a principal"""
    id: str

    @property
    def credential_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class UsernamePasswordCredential(Credential):
    """Username/password credential"""
    password: str = field(default="", repr=False)

    @property
    def username(self) -> str:
        return self.id


@dataclass(frozen=True)
class AuthenticationTransaction:
    """
    A single authentication attempt.

    Read-only for the duration of policy resolution.
    """
    service: Optional[Service]
    credentials: Tuple[Credential, ...]

    @classmethod
    def of(cls, service: Optional[Service], *credentials: Optional[Credential]) -> "AuthenticationTransaction":
        """
        Build a transaction, dropping empty credential slots.

        Raises:
            ValueError: If no credentials remain
        """
        supplied = tuple(c for c in credentials if c is not None)
        if not supplied:
            raise ValueError("Resolved credentials for this transaction are empty")
        return cls(service=service, credentials=supplied)

    def get_primary_credential(self) -> Credential:
        return self.credentials[0]

    def has_credential_of_type(self, credential_type: type) -> bool:
        return any(isinstance(c, credential_type) for c in self.credentials)
