"""Resource kind definitions: identifier format, validation and comparison."""

from .base import ResourceKind
from .bucket_acl import BucketAcl
from .distribution_configuration import DistributionConfiguration
from .identity_policy import IdentityPolicy

__all__ = [
    "ResourceKind",
    "BucketAcl",
    "DistributionConfiguration",
    "IdentityPolicy",
]
