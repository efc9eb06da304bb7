"""Helpers for remote resource tags."""

from __future__ import annotations

from ..constants import AWS_RESERVED_TAG_PREFIX


def is_aws_tag(key: str) -> bool:
    return key.startswith(AWS_RESERVED_TAG_PREFIX)


def without_aws_tags(tags: dict[str, str]) -> dict[str, str]:
    """Drop tags reserved by AWS, such as those added by CloudFormation.

    They cannot be set or removed by callers, so they never take part in
    comparisons or tag syncs.
    """
    return {key: value for key, value in tags.items() if not is_aws_tag(key)}
