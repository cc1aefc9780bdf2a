"""
Project handle.

A ``Project`` couples a ``ResourceManager`` client with a metadata snapshot
and an IAM policy snapshot. Operations are forwarded to the client; those
that change state return a new handle built from the client's response and
leave the receiver untouched. Client errors propagate unchanged.
"""

import logging
from typing import List

from ..core.resource_manager import ResourceManager
from ..models.permission import Permission
from ..models.policy import Policy
from ..models.project_info import ProjectInfo

logger = logging.getLogger(__name__)


class Project:
    """Immutable handle on a project held by a resource manager."""

    __slots__ = ("_resource_manager", "_info", "_policy")

    def __init__(
        self, resource_manager: ResourceManager, info: ProjectInfo, policy: Policy
    ) -> None:
        """
        Args:
            resource_manager: Client used for every operation; shared, not owned
            info: Metadata snapshot
            policy: IAM policy snapshot
        """
        self._resource_manager = resource_manager
        self._info = info
        self._policy = policy

    @classmethod
    def load(cls, resource_manager: ResourceManager, project_id: str) -> "Project":
        """Fetch a project's metadata and policy and wrap them in a handle."""
        logger.debug(f"Loading project {project_id}")
        info = resource_manager.get(project_id)
        policy = resource_manager.get_iam_policy(project_id)
        return cls(resource_manager, info, policy)

    @property
    def resource_manager(self) -> ResourceManager:
        return self._resource_manager

    @property
    def info(self) -> ProjectInfo:
        return self._info

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def id(self) -> str:
        return self._info.id

    def reload(self) -> "Project":
        """Return a new handle with freshly fetched metadata and policy."""
        return self.load(self._resource_manager, self.id)

    def delete(self) -> None:
        """
        Request deletion of the project.

        The snapshots of this handle are stale afterwards; call ``reload``
        to observe the new lifecycle state.
        """
        logger.info(f"Deleting project {self.id}")
        self._resource_manager.delete(self.id)

    def undelete(self) -> None:
        """Restore a project pending deletion. Snapshots are stale afterwards."""
        logger.info(f"Undeleting project {self.id}")
        self._resource_manager.undelete(self.id)

    def replace(self, project_info: ProjectInfo) -> "Project":
        """
        Replace the project's metadata.

        Returns:
            A handle carrying the metadata returned by the client and this
            handle's policy snapshot
        """
        logger.info(f"Replacing metadata of project {project_info.id}")
        info = self._resource_manager.replace(project_info)
        return type(self)(self._resource_manager, info, self._policy)

    def replace_iam_policy(self, policy: Policy) -> "Project":
        """
        Replace the project's IAM policy.

        Returns:
            A handle carrying this handle's metadata snapshot and the policy
            returned by the client
        """
        logger.info(f"Replacing IAM policy of project {self.id}")
        new_policy = self._resource_manager.replace_iam_policy(self.id, policy)
        return type(self)(self._resource_manager, self._info, new_policy)

    def has_permissions(self, *permissions: Permission) -> List[bool]:
        """Check each permission, returning one boolean per permission in request order."""
        return self._resource_manager.has_permissions(self.id, list(permissions))

    def has_all_permissions(self, *permissions: Permission) -> bool:
        """Check whether every permission is held, using a single batched check."""
        return all(self.has_permissions(*permissions))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return (
            self._resource_manager is other._resource_manager
            and self._info == other._info
            and self._policy == other._policy
        )

    def __hash__(self) -> int:
        # The client is compared by identity in __eq__
        return hash((id(self._resource_manager), self._info, self._policy))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, state={self._info.state}, policy_version={self._policy.version})"
