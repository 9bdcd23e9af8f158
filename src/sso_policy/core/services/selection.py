"""
Service Selection

Normalizes the service reference carried by a transaction into the
canonical service used for registry lookups.
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit

from ..auth.transaction import Service

logger = logging.getLogger(__name__)

LOWEST_PRECEDENCE = sys.maxsize


class ServiceSelectionStrategy(ABC):
    """A rule for turning a presented service into its canonical form"""

    order: int = 0

    @abstractmethod
    def supports(self, service: Service) -> bool:
        pass

    @abstractmethod
    def resolve_service(self, service: Service) -> Service:
        pass


class DefaultServiceSelectionStrategy(ServiceSelectionStrategy):
    """Uses the presented service as-is"""

    order = LOWEST_PRECEDENCE

    def supports(self, service: Service) -> bool:
        return True

    def resolve_service(self, service: Service) -> Service:
        return service


class QueryParameterServiceSelectionStrategy(ServiceSelectionStrategy):
    """
    Selects the service named by a query parameter of the presented URL.

    Example with parameter "service":
        https://proxy.example.org/login?service=https://app.example.org
        -> https://app.example.org
    """

    def __init__(self, parameter_name: str, order: int = 0):
        self.parameter_name = parameter_name
        self.order = order

    def _extract(self, service: Service) -> Optional[str]:
        query = urlsplit(service.id).query
        if not query:
            return None
        values = parse_qs(query).get(self.parameter_name)
        return values[0] if values else None

    def supports(self, service: Service) -> bool:
        return self._extract(service) is not None

    def resolve_service(self, service: Service) -> Service:
        target = self._extract(service)
        if target is None:
            return service
        return Service(id=target, original_url=service.id, attributes=service.attributes)


class ServiceSelectionPlan:
    """
    Ordered set of selection strategies.

    The first supporting strategy (ascending order) resolves the service.
    A default pass-through strategy is always present.
    """

    def __init__(self, *strategies: ServiceSelectionStrategy):
        self._strategies: List[ServiceSelectionStrategy] = []
        for strategy in strategies:
            self.register_strategy(strategy)
        if not any(isinstance(s, DefaultServiceSelectionStrategy) for s in self._strategies):
            self.register_strategy(DefaultServiceSelectionStrategy())

    def register_strategy(self, strategy: ServiceSelectionStrategy) -> None:
        self._strategies.append(strategy)
        self._strategies.sort(key=lambda s: s.order)

    @property
    def strategies(self) -> List[ServiceSelectionStrategy]:
        return list(self._strategies)

    def resolve_service(self, service: Optional[Service]) -> Optional[Service]:
        """Resolve the canonical service, or None when no service is given"""
        if service is None:
            return None

        for strategy in self._strategies:
            if strategy.supports(service):
                resolved = strategy.resolve_service(service)
                if resolved is not service:
                    logger.debug(f"Resolved service [{service.id}] to [{getattr(resolved, 'id', None)}]")
                return resolved

        return service
