"""Constants for the resource provider."""

# API Group
API_GROUP = "provider.cloud37.dev"
API_GROUP_VERSION = f"{API_GROUP}/v1alpha1"

# Controller name used in structured logs
CONTROLLER_NAME = "cloud-resource-provider"

# Resource Kinds
KIND_BUCKET_ACL = "BucketAcl"
KIND_IDENTITY_POLICY = "IdentityPolicy"
KIND_DISTRIBUTION_CONFIGURATION = "DistributionConfiguration"

# Identifier separators
BUCKET_ACL_SEPARATOR = ","
IDENTITY_POLICY_SEPARATOR = "|"
DISTRIBUTION_CONFIGURATION_SEPARATOR = ","

# Tags under this prefix are managed by AWS and cannot be set or removed
AWS_RESERVED_TAG_PREFIX = "aws:"

# Remote error codes that mean "the resource does not exist"
NOT_FOUND_ERROR_CODES = frozenset(
    {
        "NoSuchBucket",
        "NotFound",
        "404",
        "ResourceNotFoundException",
    }
)

# S3 canned ACLs accepted as the variant part of a bucket ACL identifier
BUCKET_CANNED_ACLS = frozenset(
    {
        "private",
        "public-read",
        "public-read-write",
        "authenticated-read",
        "aws-exec-read",
        "bucket-owner-read",
        "bucket-owner-full-control",
        "log-delivery-write",
    }
)

# Status fields
STATUS_IDENTIFIER = "identifier"
STATUS_OBSERVED_IDENTIFIER = "observedIdentifier"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_RESOURCE_APPLIED = "ResourceApplied"
EVENT_REASON_RESOURCE_DESTROYED = "ResourceDestroyed"
EVENT_REASON_INVALID_IDENTIFIER = "InvalidIdentifier"
EVENT_REASON_RESOURCE_OBSERVED = "ResourceObserved"
EVENT_REASON_RESOURCE_MISSING = "ResourceMissing"
