"""Permission models for project access checks."""

from enum import Enum


class Permission(str, Enum):
    """Project permissions that can be checked against the resource manager."""

    CREATE = "resourcemanager.projects.create"
    DELETE = "resourcemanager.projects.delete"
    GET = "resourcemanager.projects.get"
    LIST = "resourcemanager.projects.list"
    REPLACE = "resourcemanager.projects.replace"
    UNDELETE = "resourcemanager.projects.undelete"
