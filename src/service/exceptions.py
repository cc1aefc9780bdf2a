"""
Custom exceptions for the Resource Manager client.
"""


class ResourceManagerError(Exception):
    """
    The super class of all Resource Manager client related errors.
    """


class ProjectNotFoundError(ResourceManagerError):
    """
    An error thrown when a requested project does not exist.
    """


class ProjectAlreadyExistsError(ResourceManagerError):
    """
    An error thrown when creating a project whose id is already taken.
    """


class ProjectStateError(ResourceManagerError):
    """
    An error thrown when a lifecycle operation does not apply to the project's current state.
    """


class PolicyConflictError(ResourceManagerError):
    """
    An error thrown when a policy update carries a stale etag.
    """


class PermissionDeniedError(ResourceManagerError):
    """
    An error thrown when the caller lacks a permission required for an operation.
    """


# ----- Validation exceptions -----


class ValidationError(ResourceManagerError):
    """Raised when general validation fails."""

    pass


class ProjectValidationError(ValidationError):
    """Raised when project id, name or label validation fails."""

    pass


class PolicyValidationError(ValidationError):
    """Raised when policy content validation fails."""

    pass
