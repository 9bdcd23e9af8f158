"""
Tests for the policy resolution pipeline
"""

import pytest

from sso_policy.core.auth import (
    AllAuthenticationHandlersSucceededAuthenticationPolicy,
    AtLeastOneCredentialValidatedAuthenticationPolicy,
    AuthenticationPolicyResolutionPlan,
    AuthenticationPolicyResolver,
    AuthenticationPolicySet,
    AuthenticationTransaction,
    NotPreventedAuthenticationPolicy,
    RegisteredServiceAuthenticationPolicyResolver,
    ScriptedAuthenticationPolicy,
    Service,
    UnauthorizedServiceException,
    UsernamePasswordCredential,
)
from sso_policy.core.services import ServiceSelectionPlan
from sso_policy.data import InMemoryServiceRegistry, RegisteredService


class StaticResolver(AuthenticationPolicyResolver):
    """Resolver returning fixed policies"""

    def __init__(self, policies, order=0, applies=True):
        self.policies = policies
        self.order = order
        self.applies = applies
        self.resolve_calls = 0

    def supports(self, transaction):
        return self.applies

    def resolve(self, transaction):
        self.resolve_calls += 1
        return AuthenticationPolicySet(self.policies)


def make_transaction(service_id="https://app.example.org"):
    return AuthenticationTransaction.of(
        Service.of(service_id), UsernamePasswordCredential(id="casuser", password="Mellon")
    )


class TestAuthenticationPolicyResolutionPlan:

    def test_merges_supporting_resolvers_in_order(self):
        """Policies follow resolver order and duplicates are dropped"""
        late = StaticResolver([NotPreventedAuthenticationPolicy(), ScriptedAuthenticationPolicy(script="s")], order=10)
        early = StaticResolver([ScriptedAuthenticationPolicy(script="s")], order=1)
        plan = AuthenticationPolicyResolutionPlan(resolvers=[late, early])

        policies = plan.get_authentication_policies(make_transaction())

        assert list(policies) == [
            ScriptedAuthenticationPolicy(script="s"),
            NotPreventedAuthenticationPolicy(),
        ]
        assert [r.order for r in plan.resolvers] == [1, 10]

    def test_skips_unsupporting_resolvers(self):
        idle = StaticResolver([NotPreventedAuthenticationPolicy()], applies=False)
        active = StaticResolver([AllAuthenticationHandlersSucceededAuthenticationPolicy()])
        plan = AuthenticationPolicyResolutionPlan(resolvers=[idle, active])

        policies = plan.get_authentication_policies(make_transaction())

        assert list(policies) == [AllAuthenticationHandlersSucceededAuthenticationPolicy()]
        assert idle.resolve_calls == 0

    def test_defaults_when_nothing_applies(self):
        default = AtLeastOneCredentialValidatedAuthenticationPolicy(try_all=False)
        plan = AuthenticationPolicyResolutionPlan(
            resolvers=[StaticResolver([NotPreventedAuthenticationPolicy()], applies=False)],
            default_policies=[default],
        )

        policies = plan.get_authentication_policies(make_transaction())

        assert list(policies) == [default]

    def test_default_policies_are_copied(self):
        plan = AuthenticationPolicyResolutionPlan(default_policies=[NotPreventedAuthenticationPolicy()])

        plan.default_policies.add(ScriptedAuthenticationPolicy(script="x"))

        assert len(plan.default_policies) == 1

    def test_unauthorized_service_propagates(self):
        """An SSO-disabled service aborts the whole pipeline"""
        registry = InMemoryServiceRegistry([RegisteredService.model_validate({
            "id": 1,
            "name": "kiosk",
            "service_id": "https://kiosk.example.org",
            "access_strategy": {"sso_enabled": False},
        })])
        resolver = RegisteredServiceAuthenticationPolicyResolver(registry, ServiceSelectionPlan())
        fallback = StaticResolver([NotPreventedAuthenticationPolicy()], order=100)
        plan = AuthenticationPolicyResolutionPlan(resolvers=[resolver, fallback])

        with pytest.raises(UnauthorizedServiceException):
            plan.get_authentication_policies(make_transaction("https://kiosk.example.org"))
        assert fallback.resolve_calls == 0


class TestAuthenticationTransaction:

    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            AuthenticationTransaction.of(Service.of("svc"))
        with pytest.raises(ValueError):
            AuthenticationTransaction.of(Service.of("svc"), None)

    def test_drops_missing_credentials(self):
        credential = UsernamePasswordCredential(id="casuser", password="Mellon")
        transaction = AuthenticationTransaction.of(None, None, credential)

        assert transaction.credentials == (credential,)
        assert transaction.get_primary_credential().username == "casuser"
        assert transaction.has_credential_of_type(UsernamePasswordCredential)
        assert "Mellon" not in repr(transaction)
