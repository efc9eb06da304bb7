"""boto3-backed remote clients."""

from .imagebuilder import DistributionConfigurationClient
from .s3_acl import BucketAclClient
from .ses_policy import IdentityPolicyClient

__all__ = [
    "BucketAclClient",
    "DistributionConfigurationClient",
    "IdentityPolicyClient",
]
