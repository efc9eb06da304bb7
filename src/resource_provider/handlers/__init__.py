"""Handler modules for custom resources."""

# Import handlers to register them - all handlers register themselves via @kopf decorators
from . import bucket_acl  # noqa: F401
from . import distribution_configuration  # noqa: F401
from . import identity_policy  # noqa: F401
