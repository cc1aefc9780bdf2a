"""
Resource Manager service contract.

This module defines the abstract interface of the remote resource-management
service. Transport, authentication and retry policy belong to concrete
implementations; callers such as the project handle only depend on this
contract.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models.permission import Permission
from ..models.policy import Policy
from ..models.project_info import ProjectInfo


class ResourceManager(ABC):
    """
    Abstract client of a cloud resource manager.

    Every operation is synchronous and either returns a value or raises a
    ``ResourceManagerError`` subclass.
    """

    @abstractmethod
    def create(self, project_info: ProjectInfo) -> ProjectInfo:
        """
        Create a new project.

        Args:
            project_info: Metadata of the project to create

        Returns:
            The project as stored by the service, with server-owned fields set

        Raises:
            ProjectAlreadyExistsError: If the project id is taken
        """
        pass

    @abstractmethod
    def get(self, project_id: str) -> ProjectInfo:
        """
        Get a project's metadata.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        pass

    @abstractmethod
    def list_projects(self) -> List[ProjectInfo]:
        """List the metadata of every visible project."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> None:
        """
        Mark a project for deletion.

        Raises:
            ProjectNotFoundError: If the project does not exist
            ProjectStateError: If the project is not active
        """
        pass

    @abstractmethod
    def undelete(self, project_id: str) -> None:
        """
        Restore a project previously marked for deletion.

        Raises:
            ProjectNotFoundError: If the project does not exist
            ProjectStateError: If the project is not pending deletion
        """
        pass

    @abstractmethod
    def replace(self, project_info: ProjectInfo) -> ProjectInfo:
        """
        Replace a project's user-editable metadata.

        Args:
            project_info: New metadata, keyed by its id

        Returns:
            The canonical metadata stored by the service
        """
        pass

    @abstractmethod
    def get_iam_policy(self, project_id: str) -> Policy:
        """Get a project's IAM policy."""
        pass

    @abstractmethod
    def replace_iam_policy(self, project_id: str, policy: Policy) -> Policy:
        """
        Replace a project's IAM policy.

        Args:
            project_id: Project whose policy is replaced
            policy: New policy; its etag, if set, must match the stored one

        Returns:
            The canonical policy stored by the service

        Raises:
            PolicyConflictError: If the etag does not match
        """
        pass

    @abstractmethod
    def has_permissions(
        self, project_id: str, permissions: Sequence[Permission]
    ) -> List[bool]:
        """
        Check which permissions the caller holds on a project.

        Returns:
            One boolean per requested permission, in request order
        """
        pass
