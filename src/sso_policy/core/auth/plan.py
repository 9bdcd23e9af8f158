"""
Authentication Policy Resolution Plan

Runs a set of resolvers in order and merges what they contribute.
"""

import logging
from typing import Iterable, List

from .policy import AuthenticationPolicy, AuthenticationPolicySet
from .resolver import AuthenticationPolicyResolver
from .transaction import AuthenticationTransaction

logger = logging.getLogger(__name__)


class AuthenticationPolicyResolutionPlan:
    """
    Pipeline of policy resolvers.

    Resolvers are consulted in ascending `order`. Every resolver that
    supports the transaction contributes its policies; when none does,
    the default policies apply.
    """

    def __init__(
        self,
        resolvers: Iterable[AuthenticationPolicyResolver] = (),
        default_policies: Iterable[AuthenticationPolicy] = (),
    ):
        self._resolvers: List[AuthenticationPolicyResolver] = []
        self._default_policies = AuthenticationPolicySet()
        for resolver in resolvers:
            self.register_resolver(resolver)
        for policy in default_policies:
            self.register_default_policy(policy)

    def register_resolver(self, resolver: AuthenticationPolicyResolver) -> None:
        """Add a resolver; order among equal priorities follows registration"""
        self._resolvers.append(resolver)
        self._resolvers.sort(key=lambda r: r.order)
        logger.debug(f"Registered policy resolver {type(resolver).__name__} (order={resolver.order})")

    def register_default_policy(self, policy: AuthenticationPolicy) -> None:
        self._default_policies.add(policy)

    @property
    def resolvers(self) -> List[AuthenticationPolicyResolver]:
        return list(self._resolvers)

    @property
    def default_policies(self) -> AuthenticationPolicySet:
        return AuthenticationPolicySet(self._default_policies)

    def get_authentication_policies(self, transaction: AuthenticationTransaction) -> AuthenticationPolicySet:
        """
        Collect the policies for a transaction.

        Raises:
            UnauthorizedServiceException: Propagated from a resolver's support check
        """
        supporting = [r for r in self._resolvers if r.supports(transaction)]

        if not supporting:
            logger.debug("No policy resolver applies to this transaction; using default policies")
            return self.default_policies

        policies = AuthenticationPolicySet()
        for resolver in supporting:
            policies.update(resolver.resolve(transaction))

        logger.debug(f"Resolved {len(policies)} authentication policies from {len(supporting)} resolvers")
        return policies
