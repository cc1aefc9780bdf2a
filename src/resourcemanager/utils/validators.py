"""
Validation utilities for Resource Manager values.

Project ids and labels follow the naming rules enforced by the remote
resource manager, so malformed values are rejected before any call is made.
"""

import re

from ...service.arg_checkers import check_string, not_falsy
from ...service.exceptions import PolicyValidationError, ProjectValidationError

PROJECT_ID_MIN_LENGTH = 6
PROJECT_ID_MAX_LENGTH = 30
PROJECT_NAME_MAX_LENGTH = 30
LABEL_MAX_LENGTH = 63
MAX_LABELS = 256

_PROJECT_ID_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
_PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9 '\"!-]*$")
_LABEL_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")
_LABEL_VALUE_PATTERN = re.compile(r"^[a-z0-9_-]*$")

# =============================================================================
# PROJECT VALIDATION
# =============================================================================


def validate_project_id(project_id: str) -> str:
    """
    Validate a project id.

    Requirements:
    - Between 6 and 30 characters
    - Lowercase letters, digits and hyphens only
    - Starts with a letter and does not end with a hyphen

    Args:
        project_id: Project id to validate

    Returns:
        str: The validated project id

    Raises:
        ProjectValidationError: If the project id is invalid
    """
    try:
        project_id = not_falsy(project_id, "Project id")
    except ValueError as e:
        raise ProjectValidationError(str(e)) from e

    if not PROJECT_ID_MIN_LENGTH <= len(project_id) <= PROJECT_ID_MAX_LENGTH:
        raise ProjectValidationError(
            f"Project id must be between {PROJECT_ID_MIN_LENGTH} and "
            f"{PROJECT_ID_MAX_LENGTH} characters"
        )

    if not _PROJECT_ID_PATTERN.match(project_id):
        raise ProjectValidationError(
            "Project id must start with a lowercase letter and contain only "
            "lowercase letters, digits and hyphens"
        )

    if project_id.endswith("-"):
        raise ProjectValidationError("Project id cannot end with a hyphen")

    return project_id


def validate_project_name(name: str) -> str:
    """Validate a project display name."""
    try:
        name = check_string(name, "Project name", max_len=PROJECT_NAME_MAX_LENGTH)
    except ValueError as e:
        raise ProjectValidationError(str(e)) from e

    if not _PROJECT_NAME_PATTERN.match(name):
        raise ProjectValidationError(
            "Project name can only contain letters, digits, spaces, hyphens, "
            "single quotes, double quotes and exclamation points"
        )
    return name


# =============================================================================
# LABEL VALIDATION
# =============================================================================


def validate_label_key(key: str) -> str:
    """
    Validate a label key.

    Keys are 1 to 63 characters, start with a lowercase letter and may
    contain lowercase letters, digits, underscores and hyphens.
    """
    if not key:
        raise ProjectValidationError("Label key is required")
    if len(key) > LABEL_MAX_LENGTH:
        raise ProjectValidationError(
            f"Label key '{key}' exceeds maximum length of {LABEL_MAX_LENGTH}"
        )
    if not _LABEL_KEY_PATTERN.match(key):
        raise ProjectValidationError(
            f"Label key '{key}' must start with a lowercase letter and contain only "
            "lowercase letters, digits, underscores and hyphens"
        )
    return key


def validate_label_value(value: str) -> str:
    """Validate a label value. Empty values are allowed."""
    if value is None:
        raise ProjectValidationError("Label value cannot be None")
    if len(value) > LABEL_MAX_LENGTH:
        raise ProjectValidationError(
            f"Label value '{value}' exceeds maximum length of {LABEL_MAX_LENGTH}"
        )
    if not _LABEL_VALUE_PATTERN.match(value):
        raise ProjectValidationError(
            f"Label value '{value}' can only contain lowercase letters, digits, "
            "underscores and hyphens"
        )
    return value


def validate_labels(labels: dict[str, str]) -> dict[str, str]:
    """Validate every key and value of a label mapping."""
    if len(labels) > MAX_LABELS:
        raise ProjectValidationError(f"A project can have at most {MAX_LABELS} labels")
    return {validate_label_key(k): validate_label_value(v) for k, v in labels.items()}


# =============================================================================
# POLICY VALIDATION
# =============================================================================


def validate_role(role: str) -> str:
    """
    Validate a role name.

    Roles are either primitive roles (``roles/owner``) or custom roles
    (``projects/<id>/roles/<name>``, ``organizations/<id>/roles/<name>``).
    """
    try:
        role = check_string(role, "Role")
    except ValueError as e:
        raise PolicyValidationError(str(e)) from e

    if "roles/" not in role:
        raise PolicyValidationError(
            f"Role '{role}' must be of the form 'roles/<name>' or '<parent>/roles/<name>'"
        )
    return role
