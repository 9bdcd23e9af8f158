"""
Service Directory

Abstract lookup interface for registered services. Resolvers receive a
directory instance and only ever read from it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models.service import RegisteredService


class ServiceDirectory(ABC):
    """
    Read-only view over registered services.

    Implementations must be safe to call from concurrent transactions.
    """

    @abstractmethod
    def find_service(self, service: Any) -> Optional[RegisteredService]:
        """
        Locate the registered service for a canonical service.

        Args:
            service: A Service (anything with an ``id``) or a plain identifier

        Returns:
            The matching RegisteredService, or None if the service is not registered
        """
        pass

    @staticmethod
    def service_identifier(service: Any) -> Optional[str]:
        """Extract the identifier string from a service or identifier"""
        if service is None:
            return None
        if isinstance(service, str):
            return service
        return getattr(service, "id", None)
