"""
Tests for authentication policies and the ordered policy set
"""

import pytest
from dataclasses import FrozenInstanceError

from sso_policy.core.auth import (
    AllAuthenticationHandlersSucceededAuthenticationPolicy,
    AtLeastOneCredentialValidatedAuthenticationPolicy,
    AuthenticationPolicySet,
    NotPreventedAuthenticationPolicy,
    RemoteCallAuthenticationPolicy,
    ScriptedAuthenticationPolicy,
    build_policy,
)
from sso_policy.data import AuthenticationPolicyCriteria, AuthenticationPolicyType


class TestAuthenticationPolicies:

    def test_policies_compare_by_type_and_fields(self):
        assert ScriptedAuthenticationPolicy(script="a") == ScriptedAuthenticationPolicy(script="a")
        assert ScriptedAuthenticationPolicy(script="a") != ScriptedAuthenticationPolicy(script="b")
        assert AllAuthenticationHandlersSucceededAuthenticationPolicy() != NotPreventedAuthenticationPolicy()

    def test_policies_are_immutable(self):
        policy = AtLeastOneCredentialValidatedAuthenticationPolicy(try_all=True)
        with pytest.raises(FrozenInstanceError):
            policy.try_all = False

    def test_to_dict_masks_password(self):
        policy = RemoteCallAuthenticationPolicy(
            url="https://example.org", basic_auth_username="u", basic_auth_password="p"
        )
        data = policy.to_dict()

        assert data["type"] == "REMOTE_CALL"
        assert data["name"] == "RemoteCallAuthenticationPolicy"
        assert data["url"] == "https://example.org"
        assert data["basic_auth_username"] == "u"
        assert data["basic_auth_password"] == "******"
        assert "'p'" not in repr(policy)

    def test_build_policy_skips_default_and_unknown(self):
        assert build_policy(None) is None
        assert build_policy(AuthenticationPolicyCriteria()) is None
        assert build_policy(AuthenticationPolicyCriteria(type="SOMETHING_ELSE")) is None

    def test_build_policy_for_each_type(self):
        expected = {
            AuthenticationPolicyType.ANY_HANDLER: AtLeastOneCredentialValidatedAuthenticationPolicy,
            AuthenticationPolicyType.ALL_HANDLERS: AllAuthenticationHandlersSucceededAuthenticationPolicy,
            AuthenticationPolicyType.NOT_PREVENTED: NotPreventedAuthenticationPolicy,
            AuthenticationPolicyType.SCRIPTED: ScriptedAuthenticationPolicy,
            AuthenticationPolicyType.REMOTE_CALL: RemoteCallAuthenticationPolicy,
        }
        for policy_type, policy_class in expected.items():
            policy = build_policy(AuthenticationPolicyCriteria(type=policy_type))
            assert isinstance(policy, policy_class)
            assert policy.policy_type == policy_type


class TestAuthenticationPolicySet:

    def test_preserves_insertion_order(self):
        policies = [
            ScriptedAuthenticationPolicy(script="first"),
            NotPreventedAuthenticationPolicy(),
            AtLeastOneCredentialValidatedAuthenticationPolicy(try_all=False),
        ]
        policy_set = AuthenticationPolicySet(policies)

        assert list(policy_set) == policies
        assert policy_set.first() == policies[0]

    def test_drops_duplicates_keeping_first_position(self):
        policy_set = AuthenticationPolicySet()

        assert policy_set.add(NotPreventedAuthenticationPolicy()) is True
        assert policy_set.add(ScriptedAuthenticationPolicy(script="x")) is True
        assert policy_set.add(NotPreventedAuthenticationPolicy()) is False

        assert len(policy_set) == 2
        assert isinstance(policy_set.first(), NotPreventedAuthenticationPolicy)

    def test_equality_is_order_sensitive(self):
        a = NotPreventedAuthenticationPolicy()
        b = AllAuthenticationHandlersSucceededAuthenticationPolicy()

        assert AuthenticationPolicySet([a, b]) == AuthenticationPolicySet([a, b])
        assert AuthenticationPolicySet([a, b]) != AuthenticationPolicySet([b, a])

    def test_empty_set(self):
        policy_set = AuthenticationPolicySet()

        assert len(policy_set) == 0
        assert policy_set.first() is None
        assert not policy_set
        assert NotPreventedAuthenticationPolicy() not in policy_set
