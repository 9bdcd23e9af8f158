"""
Authentication Policy Resolvers

Map an authentication transaction to the policies it must satisfy.

The registered-service resolver reads the policy criteria attached to the
target service:
- supports() gates on SSO eligibility and fails closed
- resolve() builds the obligations and never fails on missing configuration
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ...data.models.service import (
    AuthenticationPolicyCriteria,
    AuthenticationPolicyType,
    RegisteredService,
)
from ...data.repos.base import ServiceDirectory
from .exceptions import UnauthorizedServiceException
from .policy import (
    AllAuthenticationHandlersSucceededAuthenticationPolicy,
    AtLeastOneCredentialValidatedAuthenticationPolicy,
    AuthenticationPolicy,
    AuthenticationPolicySet,
    NotPreventedAuthenticationPolicy,
    RemoteCallAuthenticationPolicy,
    ScriptedAuthenticationPolicy,
)
from .transaction import AuthenticationTransaction

if TYPE_CHECKING:
    from ..services.selection import ServiceSelectionPlan

logger = logging.getLogger(__name__)


PolicyBuilder = Callable[[AuthenticationPolicyCriteria], AuthenticationPolicy]

# DEFAULT is deliberately absent: it never produces a policy
POLICY_BUILDERS: Dict[AuthenticationPolicyType, PolicyBuilder] = {
    AuthenticationPolicyType.ANY_HANDLER: lambda c: AtLeastOneCredentialValidatedAuthenticationPolicy(
        try_all=c.try_all
    ),
    AuthenticationPolicyType.ALL_HANDLERS: lambda c: AllAuthenticationHandlersSucceededAuthenticationPolicy(),
    AuthenticationPolicyType.NOT_PREVENTED: lambda c: NotPreventedAuthenticationPolicy(),
    AuthenticationPolicyType.SCRIPTED: lambda c: ScriptedAuthenticationPolicy(script=c.script),
    AuthenticationPolicyType.REMOTE_CALL: lambda c: RemoteCallAuthenticationPolicy(
        url=c.url,
        basic_auth_username=c.basic_auth_username,
        basic_auth_password=c.basic_auth_password,
    ),
}


def build_policy(criteria: Optional[AuthenticationPolicyCriteria]) -> Optional[AuthenticationPolicy]:
    """
    Construct the obligation described by a criteria instance.

    Returns:
        The policy, or None for absent, DEFAULT or unrecognized criteria
    """
    if criteria is None:
        return None
    builder = POLICY_BUILDERS.get(criteria.type)
    if builder is None:
        if not criteria.is_default:
            logger.debug(f"Ignoring unrecognized authentication policy type [{criteria.type}]")
        return None
    return builder(criteria)


class AuthenticationPolicyResolver(ABC):
    """
    Maps a transaction to zero or more authentication policies.

    Resolvers compose in a pipeline ordered by `order` (lower runs first).
    """

    order: int = 0

    @abstractmethod
    def supports(self, transaction: AuthenticationTransaction) -> bool:
        """Check if this resolver has anything to contribute for the transaction"""
        pass

    @abstractmethod
    def resolve(self, transaction: AuthenticationTransaction) -> AuthenticationPolicySet:
        """Build the policies the transaction must satisfy"""
        pass


class RegisteredServiceAuthenticationPolicyResolver(AuthenticationPolicyResolver):
    """
    Resolves policies from the criteria configured on the registered service.

    Holds no per-call state; one instance can serve concurrent transactions
    as long as the selection plan and directory can.
    """

    def __init__(
        self,
        service_directory: ServiceDirectory,
        selection_plan: "ServiceSelectionPlan",
        order: int = 0,
    ):
        """
        Initialize resolver.

        Args:
            service_directory: Lookup for registered services
            selection_plan: Normalizes the transaction's service reference
            order: Position of this resolver in a resolution pipeline
        """
        self.service_directory = service_directory
        self.selection_plan = selection_plan
        self.order = order

    def _find_registered_service(self, transaction: AuthenticationTransaction):
        service = self.selection_plan.resolve_service(transaction.service)
        if service is None:
            return None, None
        return service, self.service_directory.find_service(service)

    def supports(self, transaction: AuthenticationTransaction) -> bool:
        """
        Check if the target service carries non-default policy criteria.

        Returns:
            False when no service takes part in the transaction

        Raises:
            UnauthorizedServiceException: If the service is not registered or
                may not use SSO
        """
        service, registered_service = self._find_registered_service(transaction)
        if service is None:
            return False

        logger.debug(f"Located registered service definition [{registered_service}] for this authentication transaction")
        if registered_service is None or not registered_service.access_strategy.is_sso_allowed():
            logger.warning(f"Service [{service.id}] is not allowed to use SSO.")
            raise UnauthorizedServiceException(service)

        criteria = self._get_criteria(registered_service)
        return criteria is not None and not criteria.is_default

    def resolve(self, transaction: AuthenticationTransaction) -> AuthenticationPolicySet:
        """
        Build the policies configured for the target service.

        Access is assumed to have been checked by supports(); a missing
        service or missing criteria yields an empty set.
        """
        _, registered_service = self._find_registered_service(transaction)
        policies = AuthenticationPolicySet()

        policy = build_policy(self._get_criteria(registered_service))
        if policy is not None:
            policies.add(policy)

        logger.debug(f"Authentication policies for this transaction are [{policies}]")
        return policies

    @staticmethod
    def _get_criteria(registered_service: Optional[RegisteredService]) -> Optional[AuthenticationPolicyCriteria]:
        if registered_service is None or registered_service.authentication_policy is None:
            return None
        return registered_service.authentication_policy.criteria
