"""Service directory implementations."""

from .base import ServiceDirectory
from .service import InMemoryServiceRegistry

__all__ = [
    "ServiceDirectory",
    "InMemoryServiceRegistry",
]
