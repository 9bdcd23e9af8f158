"""
Bootstrap

Wires the resolver stack from configuration:
service registry -> selection plan -> registered-service resolver -> resolution plan.

Service definitions come from:
1. The file named by registry.path (relative to the config's working_dir)
2. Inline registry.services entries
"""

import logging
from typing import Optional

from ..config.schema import AppConfig
from ..data.models.service import AuthenticationPolicyCriteria
from ..data.repos.service import InMemoryServiceRegistry
from .auth.plan import AuthenticationPolicyResolutionPlan
from .auth.resolver import RegisteredServiceAuthenticationPolicyResolver, build_policy
from .services.selection import QueryParameterServiceSelectionStrategy, ServiceSelectionPlan

logger = logging.getLogger(__name__)


def build_service_registry(config: AppConfig) -> InMemoryServiceRegistry:
    """
    Create a service registry populated from configuration.

    Raises:
        FileNotFoundError: If registry.path names a missing file
    """
    registry = InMemoryServiceRegistry()

    registry_path = config.get_registry_path()
    if registry_path is not None:
        registry.load_from_file(registry_path)

    if config.registry.services:
        registry.load(config.registry.services)

    logger.info(f"Service registry ready with {registry.size()} services")
    return registry


def build_selection_plan(config: AppConfig) -> ServiceSelectionPlan:
    """Create the service selection plan described by configuration"""
    strategies = []
    if config.selection.query_parameter:
        strategies.append(QueryParameterServiceSelectionStrategy(
            config.selection.query_parameter,
            order=config.selection.query_parameter_order,
        ))
    return ServiceSelectionPlan(*strategies)


def build_policy_plan(
    config: AppConfig,
    registry: Optional[InMemoryServiceRegistry] = None,
) -> AuthenticationPolicyResolutionPlan:
    """
    Build the full resolution pipeline.

    Args:
        config: Loaded configuration
        registry: Existing registry to use instead of loading one

    Returns:
        Resolution plan with the registered-service resolver and default policies
    """
    if registry is None:
        registry = build_service_registry(config)

    resolver = RegisteredServiceAuthenticationPolicyResolver(
        service_directory=registry,
        selection_plan=build_selection_plan(config),
        order=config.resolver.order,
    )

    plan = AuthenticationPolicyResolutionPlan(resolvers=[resolver])

    for criteria_data in config.resolver.default_policies:
        policy = build_policy(AuthenticationPolicyCriteria.model_validate(criteria_data))
        if policy is None:
            logger.warning(f"Default policy {criteria_data} does not describe an obligation; skipped")
            continue
        plan.register_default_policy(policy)

    return plan
