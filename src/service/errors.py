"""
Custom error types for the Resource Manager client.
"""

from enum import Enum

from src.service.exceptions import (
    PermissionDeniedError,
    PolicyConflictError,
    PolicyValidationError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
    ProjectStateError,
    ProjectValidationError,
    ResourceManagerError,
    ValidationError,
)


class ErrorType(Enum):
    """
    The type of an error, consisting of an error code and a brief string describing the type.
    :ivar error_code: an integer error code.
    :ivar error_type: a brief string describing the error type.
    """

    RESOURCE_MANAGER_ERROR = (20000, "Resource manager error")
    """ A general error related to the resource manager. """

    PROJECT_NOT_FOUND = (20010, "Project not found")
    """ The requested project does not exist. """

    PROJECT_ALREADY_EXISTS = (20020, "Project already exists")
    """ A project with the requested id already exists. """

    PROJECT_STATE_ERROR = (20030, "Invalid project lifecycle state")
    """ The operation does not apply to the project's lifecycle state. """

    POLICY_CONFLICT = (20040, "Policy etag conflict")
    """ The policy was modified concurrently. """

    PERMISSION_DENIED = (20050, "Permission denied")
    """ The caller lacks a required permission. """

    VALIDATION_FAILED = (30000, "Validation failed")
    """ A general validation error. """

    PROJECT_VALIDATION_FAILED = (30010, "Project validation failed")
    """ Project content failed validation. """

    POLICY_VALIDATION_FAILED = (30020, "Policy validation failed")
    """ Policy content failed validation. """

    def __init__(self, error_code, error_type):
        self.error_code = error_code
        self.error_type = error_type


_ERR_MAP = {
    ProjectNotFoundError: ErrorType.PROJECT_NOT_FOUND,
    ProjectAlreadyExistsError: ErrorType.PROJECT_ALREADY_EXISTS,
    ProjectStateError: ErrorType.PROJECT_STATE_ERROR,
    PolicyConflictError: ErrorType.POLICY_CONFLICT,
    PermissionDeniedError: ErrorType.PERMISSION_DENIED,
    ProjectValidationError: ErrorType.PROJECT_VALIDATION_FAILED,
    PolicyValidationError: ErrorType.POLICY_VALIDATION_FAILED,
    ValidationError: ErrorType.VALIDATION_FAILED,
    ResourceManagerError: ErrorType.RESOURCE_MANAGER_ERROR,
}


def error_type_for(err: ResourceManagerError) -> ErrorType:
    """
    Map an error to its error type, walking up the exception hierarchy.
    """
    for cls in type(err).__mro__:
        if cls in _ERR_MAP:
            return _ERR_MAP[cls]
    return ErrorType.RESOURCE_MANAGER_ERROR
