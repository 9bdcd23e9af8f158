"""
Policy Resolver Configuration Schema

Defines the configuration structure for the policy resolver.
All configuration can be specified via policy.yaml or environment variables.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path


DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class ResolverConfig:
    """Configuration for the registered-service policy resolver"""
    order: int = 0
    # Criteria-shaped mappings used when no resolver applies, e.g. {"type": "ANY_HANDLER"}
    default_policies: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class RegistryConfig:
    """Where registered service definitions come from"""
    path: Optional[str] = None
    # Inline definitions, loaded in addition to `path`
    services: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class SelectionConfig:
    """Configuration for service selection"""
    # Query parameter carrying the real target service, e.g. "service"
    query_parameter: Optional[str] = None
    query_parameter_order: int = 0


@dataclass
class LoggingConfig:
    """Configuration for logging output"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class AppConfig:
    """
    Central configuration for the policy resolver.

    Example policy.yaml:
    ```yaml
    resolver:
      order: 0
      default_policies:
        - type: ANY_HANDLER

    registry:
      path: ./services.yaml

    selection:
      query_parameter: service

    logging:
      level: INFO
    ```
    """
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Working directory (relative registry paths resolve against it)
    working_dir: Path = field(default_factory=Path.cwd)

    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_registry_path(self) -> Optional[Path]:
        """Get the absolute path of the service definition file, if any"""
        if not self.registry.path:
            return None
        path = Path(self.registry.path)
        if not path.is_absolute():
            path = self.working_dir / path
        return path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create AppConfig from dictionary (e.g., parsed YAML)"""
        resolver_data = data.get("resolver") or {}
        resolver_config = ResolverConfig(
            order=int(resolver_data.get("order", 0)),
            default_policies=list(resolver_data.get("default_policies") or []),
        )

        registry_data = data.get("registry") or {}
        registry_config = RegistryConfig(
            path=registry_data.get("path"),
            services=list(registry_data.get("services") or []),
        )

        selection_data = data.get("selection") or {}
        selection_config = SelectionConfig(
            query_parameter=selection_data.get("query_parameter"),
            query_parameter_order=int(selection_data.get("query_parameter_order", 0)),
        )

        logging_data = data.get("logging") or {}
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
        )

        return cls(
            resolver=resolver_config,
            registry=registry_config,
            selection=selection_config,
            logging=logging_config,
            working_dir=Path(data.get("working_dir", ".")),
            metadata=data.get("metadata", {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (for serialization)"""
        return {
            "resolver": {
                "order": self.resolver.order,
                "default_policies": self.resolver.default_policies,
            },
            "registry": {
                "path": self.registry.path,
                "services": self.registry.services,
            },
            "selection": {
                "query_parameter": self.selection.query_parameter,
                "query_parameter_order": self.selection.query_parameter_order,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
            "working_dir": str(self.working_dir),
            "metadata": self.metadata,
        }
