"""Unit tests for the bucket ACL remote client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from resource_provider.exceptions import RemoteFailure
from resource_provider.models import AccessControlPolicy, BucketAclConfig, Grant, Grantee, Owner
from resource_provider.services.aws import BucketAclClient


class TestBucketAclClient:
    """Test bucket ACL client."""

    @pytest.fixture
    def provider(self) -> BucketAclClient:
        """Create a test client."""
        return BucketAclClient(MagicMock())

    def test_create_canned_acl(self, provider: BucketAclClient) -> None:
        """Test applying a canned ACL with an expected owner."""
        config = BucketAclConfig(bucket="example", expected_bucket_owner="123456789012", acl="private")

        parts = provider.create(config)

        assert parts == ("example", "123456789012", "private")
        provider.client.put_bucket_acl.assert_called_once_with(
            Bucket="example", ExpectedBucketOwner="123456789012", ACL="private"
        )

    def test_create_access_control_policy(self, provider: BucketAclClient) -> None:
        """Test applying an explicit grant list."""
        config = BucketAclConfig(
            bucket="example",
            access_control_policy=AccessControlPolicy(
                owner=Owner(id="owner-id"),
                grants=(
                    Grant(grantee=Grantee(type="CanonicalUser", id="owner-id"), permission="FULL_CONTROL"),
                    Grant(
                        grantee=Grantee(type="Group", uri="http://acs.amazonaws.com/groups/s3/LogDelivery"),
                        permission="WRITE",
                    ),
                ),
            ),
        )

        parts = provider.create(config)

        assert parts == ("example", "", "")
        call_args = provider.client.put_bucket_acl.call_args
        assert call_args[1]["Bucket"] == "example"
        assert "ExpectedBucketOwner" not in call_args[1]
        policy = call_args[1]["AccessControlPolicy"]
        assert policy["Owner"] == {"ID": "owner-id"}
        assert policy["Grants"][0] == {
            "Grantee": {"Type": "CanonicalUser", "ID": "owner-id"},
            "Permission": "FULL_CONTROL",
        }
        assert policy["Grants"][1]["Grantee"] == {
            "Type": "Group",
            "URI": "http://acs.amazonaws.com/groups/s3/LogDelivery",
        }

    def test_fetch(self, provider: BucketAclClient) -> None:
        """Test reading back an ACL."""
        provider.client.get_bucket_acl.return_value = {
            "Owner": {"ID": "owner-id", "DisplayName": "owner"},
            "Grants": [
                {
                    "Grantee": {"Type": "CanonicalUser", "ID": "owner-id", "DisplayName": "owner"},
                    "Permission": "FULL_CONTROL",
                }
            ],
        }

        result = provider.fetch(("example", "", "private"))

        assert result.found
        assert result.state.acl == "private"
        assert result.state.access_control_policy.owner.id == "owner-id"
        assert result.state.access_control_policy.grants[0].grantee.display_name == "owner"
        provider.client.get_bucket_acl.assert_called_once_with(Bucket="example")

    def test_fetch_bucket_missing(self, provider: BucketAclClient) -> None:
        """Test that a missing bucket is reported as not found."""
        error_response = {"Error": {"Code": "NoSuchBucket", "Message": "The specified bucket does not exist"}}
        provider.client.get_bucket_acl.side_effect = ClientError(error_response, "GetBucketAcl")

        result = provider.fetch(("example", "", ""))

        assert not result.found
        assert result.state is None

    def test_fetch_access_denied(self, provider: BucketAclClient) -> None:
        """Test that other errors are raised as remote failures."""
        error_response = {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}
        provider.client.get_bucket_acl.side_effect = ClientError(error_response, "GetBucketAcl")

        with pytest.raises(RemoteFailure) as exc_info:
            provider.fetch(("example", "", ""))

        assert exc_info.value.code == "AccessDenied"
        assert exc_info.value.operation == "get_bucket_acl"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_delete_is_local(self, provider: BucketAclClient) -> None:
        """Test that deleting makes no remote call."""
        assert provider.delete(("example", "", "private")) is True
        provider.client.put_bucket_acl.assert_not_called()

    def test_rate_limiter_is_used(self) -> None:
        """Test that every call waits on the rate limiter."""
        rate_limiter = MagicMock()
        provider = BucketAclClient(MagicMock(), rate_limiter=rate_limiter)

        provider.create(BucketAclConfig(bucket="example", acl="private"))

        rate_limiter.wait.assert_called_once()
