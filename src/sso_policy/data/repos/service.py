"""
In-Memory Service Registry

Holds registered service definitions and matches canonical service
identifiers against them.

Definitions can be loaded from a YAML (or JSON) document:

```yaml
services:
  - id: 1
    name: "Example"
    service_id: "^https://app\\.example\\.org/.*"
    access_strategy:
      sso_enabled: true
    authentication_policy:
      criteria:
        type: ALL_HANDLERS
```
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml

from ...config.loader import interpolate_env_vars
from ..models.service import AuthenticationPolicyType, RegisteredService
from .base import ServiceDirectory

logger = logging.getLogger(__name__)


class InMemoryServiceRegistry(ServiceDirectory):
    """
    Registry of services kept in memory.

    Lookups scan services in ascending (evaluation_order, id) and return the
    first match. Writes swap in a new snapshot, so readers never see a
    half-updated registry.
    """

    def __init__(self, services: Optional[Iterable[RegisteredService]] = None):
        self._lock = threading.Lock()
        self._services: Dict[int, RegisteredService] = {}
        self._ordered: Tuple[RegisteredService, ...] = ()

        for service in services or []:
            self._services[service.id] = service
        self._reindex()

    def _reindex(self) -> None:
        self._ordered = tuple(
            sorted(self._services.values(), key=lambda s: (s.evaluation_order, s.id))
        )

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find_service(self, service: Any) -> Optional[RegisteredService]:
        service_id = self.service_identifier(service)
        if not service_id:
            return None

        for registered_service in self._ordered:
            if registered_service.matches(service_id):
                return registered_service

        logger.debug(f"No registered service matches {service_id}")
        return None

    def get(self, registered_service_id: int) -> Optional[RegisteredService]:
        """Get a registered service by its numeric id"""
        return self._services.get(registered_service_id)

    def list_services(self) -> List[RegisteredService]:
        """List services in evaluation order"""
        return list(self._ordered)

    def size(self) -> int:
        return len(self._ordered)

    # =========================================================================
    # MANAGEMENT
    # =========================================================================

    def save(self, registered_service: RegisteredService) -> RegisteredService:
        """Register a service, replacing any existing one with the same id"""
        with self._lock:
            self._services[registered_service.id] = registered_service
            self._reindex()
        logger.info(f"Saved registered service: {registered_service.name} ({registered_service.id})")
        return registered_service

    def delete(self, registered_service_id: int) -> bool:
        """Remove a service; returns True if it existed"""
        with self._lock:
            if registered_service_id not in self._services:
                return False
            del self._services[registered_service_id]
            self._reindex()
        logger.info(f"Deleted registered service: {registered_service_id}")
        return True

    def load(self, definitions: Iterable[Dict[str, Any]]) -> int:
        """
        Validate and register raw service definitions.

        Raises:
            pydantic.ValidationError: If a definition is invalid
            ValueError: If two definitions share the same id
        """
        services = [RegisteredService.model_validate(d) for d in definitions]

        seen = set()
        for service in services:
            if service.id in seen:
                raise ValueError(f"Duplicate registered service id: {service.id}")
            seen.add(service.id)

        with self._lock:
            for service in services:
                self._services[service.id] = service
            self._reindex()

        logger.info(f"Loaded {len(services)} registered services")
        return len(services)

    def load_from_file(self, path: Union[str, Path], interpolate: bool = True) -> int:
        """
        Load service definitions from a YAML or JSON file.

        The document is either a list of definitions or a mapping with a
        ``services`` list.

        Raises:
            FileNotFoundError: If the file doesn't exist
            KeyError: If a required environment variable is not set
            yaml.YAMLError: If the document is malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Service definition file not found: {path}")

        logger.info(f"Loading registered services from {path}")
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = []
        if interpolate:
            data = interpolate_env_vars(data)

        if isinstance(data, dict):
            definitions = data.get("services") or []
        elif isinstance(data, list):
            definitions = data
        else:
            raise ValueError(f"Unsupported service definition document in {path}")

        return self.load(definitions)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InMemoryServiceRegistry":
        registry = cls()
        registry.load_from_file(path)
        return registry

    # =========================================================================
    # UTILITY
    # =========================================================================

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics"""
        services = self._ordered
        return {
            "total_services": len(services),
            "sso_enabled_services": len([s for s in services if s.access_strategy.is_sso_allowed()]),
            "services_by_policy_type": {
                ptype.value: len([
                    s for s in services
                    if s.authentication_policy.criteria is not None
                    and s.authentication_policy.criteria.type == ptype
                ])
                for ptype in AuthenticationPolicyType
            },
        }
