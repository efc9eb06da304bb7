"""Tests for the custom resource handler."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import kopf
import pytest

from resource_provider.builders.configs import identity_policy_config_from_spec
from resource_provider.exceptions import RemoteFailure, WrongArityError
from resource_provider.handlers.base import RETRY_DELAY_SECONDS, ResourceHandler
from resource_provider.models import IdentityPolicyConfig
from resource_provider.reconciler import Absent, Failed, Present

POLICY = json.dumps({"Version": "2012-10-17", "Statement": []})
SPEC = {"identity": "example.com", "name": "policy-1", "policy": POLICY}
META = {"name": "test-policy", "namespace": "default", "generation": 3}
BODY = {"metadata": META}
STATE = IdentityPolicyConfig(identity="example.com", name="policy-1", policy=POLICY)


@pytest.fixture
def reconciler():
    return MagicMock()


@pytest.fixture(autouse=True)
def mock_event():
    with patch("resource_provider.utils.events.kopf.event") as mock:
        yield mock


@pytest.fixture
def handler() -> ResourceHandler:
    return ResourceHandler("IdentityPolicy", identity_policy_config_from_spec)


@pytest.fixture
def memo(reconciler):
    memo = MagicMock()
    memo.reconcilers = {"IdentityPolicy": reconciler}
    return memo


class TestReconcile:
    """Test cases for ResourceHandler.reconcile."""

    def test_first_apply_records_identifier(self, handler, reconciler, memo):
        """Test that a new resource stores its identifier and state."""
        reconciler.apply.return_value = ("example.com|policy-1", Present(STATE))
        patch_obj = kopf.Patch()

        handler.reconcile(SPEC, META, {}, patch_obj, BODY, memo)

        reconciler.apply.assert_called_once_with(STATE, None)
        assert patch_obj.status["identifier"] == "example.com|policy-1"
        assert patch_obj.status["ready"] is True
        assert patch_obj.status["observedGeneration"] == 3
        assert patch_obj.status["remoteState"] == {
            "identity": "example.com",
            "name": "policy-1",
            "policy": POLICY,
        }
        assert "lastSyncTime" in patch_obj.status

    def test_existing_identifier_is_passed(self, handler, reconciler, memo):
        """Test that the tracked identifier is reused."""
        reconciler.apply.return_value = ("example.com|policy-1", Present(STATE))

        handler.reconcile(SPEC, META, {"identifier": "example.com|policy-1"}, kopf.Patch(), BODY, memo)

        reconciler.apply.assert_called_once_with(STATE, "example.com|policy-1")
        reconciler.read.assert_not_called()

    def test_invalid_identifier_is_permanent(self, handler, reconciler, memo, mock_event):
        """Test that a decode error is not retried."""
        reconciler.apply.return_value = ("bad", Failed(WrongArityError("bad", 1, frozenset({2}))))

        with pytest.raises(kopf.PermanentError):
            handler.reconcile(SPEC, META, {"identifier": "bad"}, kopf.Patch(), BODY, memo)

        reasons = [call[1]["reason"] for call in mock_event.call_args_list]
        assert "InvalidIdentifier" in reasons

    def test_remote_failure_is_retried(self, handler, reconciler, memo):
        """Test that a remote failure is retried later."""
        error = RemoteFailure("IdentityPolicy", "put_identity_policy", "Rate exceeded", code="Throttling")
        reconciler.apply.return_value = (None, Failed(error))

        with pytest.raises(kopf.TemporaryError) as exc_info:
            handler.reconcile(SPEC, META, {}, kopf.Patch(), BODY, memo)

        assert exc_info.value.delay == RETRY_DELAY_SECONDS

    def test_invalid_spec_is_permanent(self, handler, reconciler, memo):
        """Test that an unusable spec fails before any remote call."""
        with pytest.raises(kopf.PermanentError):
            handler.reconcile({**SPEC, "policy": 42}, META, {}, kopf.Patch(), BODY, memo)

        reconciler.apply.assert_not_called()

    def test_import_identifier(self, handler, reconciler, memo):
        """Test adopting an existing remote resource."""
        reconciler.read.return_value = Present(STATE)
        reconciler.apply.return_value = ("example.com|policy-1", Present(STATE))
        spec = {**SPEC, "importIdentifier": "example.com|policy-1"}

        handler.reconcile(spec, META, {}, kopf.Patch(), BODY, memo)

        reconciler.read.assert_called_once_with("example.com|policy-1")
        reconciler.apply.assert_called_once_with(STATE, "example.com|policy-1")

    def test_import_missing_resource(self, handler, reconciler, memo):
        """Test that importing a resource that does not exist fails."""
        reconciler.read.return_value = Absent()
        spec = {**SPEC, "importIdentifier": "example.com|policy-1"}

        with pytest.raises(kopf.PermanentError, match="does not exist"):
            handler.reconcile(spec, META, {}, kopf.Patch(), BODY, memo)

        reconciler.apply.assert_not_called()


class TestDelete:
    """Test cases for ResourceHandler.delete."""

    def test_never_applied(self, handler, reconciler, memo):
        """Test that deleting an unapplied resource is a no-op."""
        handler.delete(SPEC, META, {}, BODY, memo)

        reconciler.destroy.assert_not_called()

    def test_destroy(self, handler, reconciler, memo, mock_event):
        """Test that the tracked resource is destroyed."""
        reconciler.destroy.return_value = Absent()

        handler.delete(SPEC, META, {"identifier": "example.com|policy-1"}, BODY, memo)

        reconciler.destroy.assert_called_once_with("example.com|policy-1")
        assert mock_event.call_args[1]["reason"] == "ResourceDestroyed"

    def test_destroy_failure_is_retried(self, handler, reconciler, memo):
        """Test that a failed delete blocks removal until it succeeds."""
        reconciler.destroy.return_value = Failed(
            RemoteFailure("IdentityPolicy", "delete_identity_policy", "Access Denied")
        )

        with pytest.raises(kopf.TemporaryError):
            handler.delete(SPEC, META, {"identifier": "example.com|policy-1"}, BODY, memo)

    def test_observed_resource_is_left_in_place(self, handler, reconciler, memo):
        """Test that deleting an observe-only resource never destroys it."""
        spec = {"observeIdentifier": "example.com|policy-1"}

        handler.delete(spec, META, {"identifier": "example.com|policy-1"}, BODY, memo)

        reconciler.destroy.assert_not_called()


class TestObserve:
    """Test cases for observe-only resources."""

    SPEC = {"observeIdentifier": "example.com|policy-1"}

    def test_present_mirrors_remote_state(self, handler, reconciler, memo, mock_event):
        """Test that the looked up state is written to status."""
        reconciler.read.return_value = Present(STATE)
        patch_obj = kopf.Patch()

        handler.reconcile(self.SPEC, META, {}, patch_obj, BODY, memo)

        reconciler.read.assert_called_once_with("example.com|policy-1")
        reconciler.apply.assert_not_called()
        reconciler.destroy.assert_not_called()
        assert patch_obj.status["observedIdentifier"] == "example.com|policy-1"
        assert patch_obj.status["remoteState"] == {
            "identity": "example.com",
            "name": "policy-1",
            "policy": POLICY,
        }
        assert patch_obj.status["ready"] is True
        assert patch_obj.status["observedGeneration"] == 3
        assert "identifier" not in patch_obj.status
        assert mock_event.call_args[1]["reason"] == "ResourceObserved"

    def test_absent_is_not_ready(self, handler, reconciler, memo, mock_event):
        """Test that a missing resource is reported without failing the handler."""
        reconciler.read.return_value = Absent()
        patch_obj = kopf.Patch()

        handler.reconcile(self.SPEC, META, {}, patch_obj, BODY, memo)

        assert patch_obj.status["ready"] is False
        assert patch_obj.status["remoteState"] is None
        assert mock_event.call_args[1]["reason"] == "ResourceMissing"
        assert mock_event.call_args[1]["type"] == "Warning"
        reconciler.apply.assert_not_called()

    def test_spec_fields_are_ignored(self, handler, reconciler, memo):
        """Test that desired-state fields do not trigger an apply."""
        reconciler.read.return_value = Present(STATE)

        handler.reconcile({**SPEC, **self.SPEC, "policy": 42}, META, {}, kopf.Patch(), BODY, memo)

        reconciler.apply.assert_not_called()

    def test_invalid_identifier_is_permanent(self, handler, reconciler, memo):
        """Test that an undecodable identifier is not retried."""
        reconciler.read.return_value = Failed(WrongArityError("bad", 1, frozenset({2})))

        with pytest.raises(kopf.PermanentError):
            handler.reconcile({"observeIdentifier": "bad"}, META, {}, kopf.Patch(), BODY, memo)

    def test_remote_failure_is_retried(self, handler, reconciler, memo):
        """Test that a failed lookup is retried later."""
        error = RemoteFailure("IdentityPolicy", "get_identity_policies", "Access Denied", code="AccessDenied")
        reconciler.read.return_value = Failed(error)

        with pytest.raises(kopf.TemporaryError):
            handler.reconcile(self.SPEC, META, {}, kopf.Patch(), BODY, memo)


class TestReconcilerFromMemo:
    """The handler uses the reconcilers built at startup."""

    def test_uses_memo_reconciler(self, handler, reconciler, memo):
        """Test that the reconciler for the handler's kind is returned."""
        assert handler.reconciler(memo) is reconciler

    def test_same_reconciler_across_calls(self, handler, reconciler, memo):
        """Test that repeated reconciles reuse one reconciler."""
        reconciler.apply.return_value = ("example.com|policy-1", Present(STATE))

        handler.reconcile(SPEC, META, {}, kopf.Patch(), BODY, memo)
        handler.reconcile(SPEC, META, {"identifier": "example.com|policy-1"}, kopf.Patch(), BODY, memo)

        assert reconciler.apply.call_count == 2
