"""
In-memory Resource Manager implementation.

Keeps projects and their policies in process memory while following the
lifecycle and concurrency rules of the remote service, so that code written
against ``ResourceManager`` can be exercised without network access.
"""

import logging
import threading
import time
import uuid
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ...service.exceptions import (
    PermissionDeniedError,
    PolicyConflictError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
    ProjectStateError,
)
from ..models.permission import Permission
from ..models.policy import Policy
from ..models.project_info import ProjectInfo, State
from .resource_manager import ResourceManager

logger = logging.getLogger(__name__)

# Version given to the empty policy every new project starts with
INITIAL_POLICY_VERSION = 0


def _now_millis() -> int:
    return int(time.time() * 1000)


def _new_etag() -> str:
    return uuid.uuid4().hex


class InMemoryResourceManager(ResourceManager):
    """ResourceManager backed by dictionaries. Safe for use from multiple threads."""

    def __init__(
        self,
        granted_permissions: Optional[Iterable[Permission]] = None,
        clock: Optional[Callable[[], int]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize an empty resource manager.

        Args:
            granted_permissions: Permissions reported as held by the caller; all of them if None
            clock: Callable returning the current time in epoch milliseconds
            logger_instance: Optional logger instance
        """
        self._granted = (
            frozenset(Permission)
            if granted_permissions is None
            else frozenset(granted_permissions)
        )
        self._clock = clock or _now_millis
        self.logger = logger_instance or logging.getLogger(self.__class__.__name__)

        self._projects: Dict[str, ProjectInfo] = {}
        self._policies: Dict[str, Policy] = {}
        self._next_number = 1
        self._lock = threading.Lock()

    def _get_project(self, project_id: str) -> ProjectInfo:
        try:
            return self._projects[project_id]
        except KeyError:
            raise ProjectNotFoundError(f"Project '{project_id}' not found") from None

    def _require(self, permission: Permission, target: str) -> None:
        if permission not in self._granted:
            raise PermissionDeniedError(
                f"Caller lacks permission {permission.value} on '{target}'"
            )

    # === Project operations ===

    def create(self, project_info: ProjectInfo) -> ProjectInfo:
        self._require(Permission.CREATE, project_info.id)
        with self._lock:
            if project_info.id in self._projects:
                raise ProjectAlreadyExistsError(
                    f"Project '{project_info.id}' already exists"
                )
            stored = project_info.derive(
                number=self._next_number,
                create_time_millis=self._clock(),
                state=State.ACTIVE,
            )
            self._next_number += 1
            self._projects[stored.id] = stored
            self._policies[stored.id] = Policy(
                version=INITIAL_POLICY_VERSION, etag=_new_etag()
            )
        self.logger.info(f"Created project {stored.id} (number {stored.number})")
        return stored

    def get(self, project_id: str) -> ProjectInfo:
        self._require(Permission.GET, project_id)
        with self._lock:
            return self._get_project(project_id)

    def list_projects(self) -> List[ProjectInfo]:
        self._require(Permission.LIST, "projects")
        with self._lock:
            return [self._projects[key] for key in sorted(self._projects)]

    def delete(self, project_id: str) -> None:
        self._require(Permission.DELETE, project_id)
        with self._lock:
            project = self._get_project(project_id)
            if project.state != State.ACTIVE:
                raise ProjectStateError(
                    f"Project '{project_id}' cannot be deleted in state {project.state.value}"
                )
            self._projects[project_id] = project.with_state(State.DELETE_REQUESTED)
        self.logger.info(f"Requested deletion of project {project_id}")

    def undelete(self, project_id: str) -> None:
        self._require(Permission.UNDELETE, project_id)
        with self._lock:
            project = self._get_project(project_id)
            if project.state != State.DELETE_REQUESTED:
                raise ProjectStateError(
                    f"Project '{project_id}' cannot be undeleted in state {project.state.value}"
                )
            self._projects[project_id] = project.with_state(State.ACTIVE)
        self.logger.info(f"Restored project {project_id}")

    def replace(self, project_info: ProjectInfo) -> ProjectInfo:
        self._require(Permission.REPLACE, project_info.id)
        with self._lock:
            existing = self._get_project(project_info.id)
            if existing.state != State.ACTIVE:
                raise ProjectStateError(
                    f"Project '{project_info.id}' cannot be replaced in state {existing.state.value}"
                )
            # Only name, labels and parent are user-editable
            stored = project_info.derive(
                number=existing.number,
                create_time_millis=existing.create_time_millis,
                state=existing.state,
                parent=project_info.parent or existing.parent,
            )
            self._projects[stored.id] = stored
        self.logger.info(f"Replaced metadata of project {stored.id}")
        return stored

    # === IAM operations ===

    def get_iam_policy(self, project_id: str) -> Policy:
        self._require(Permission.GET, project_id)
        with self._lock:
            self._get_project(project_id)
            return self._policies[project_id]

    def replace_iam_policy(self, project_id: str, policy: Policy) -> Policy:
        self._require(Permission.REPLACE, project_id)
        with self._lock:
            self._get_project(project_id)
            current = self._policies[project_id]
            if policy.etag is not None and policy.etag != current.etag:
                raise PolicyConflictError(
                    f"Policy of project '{project_id}' was modified concurrently"
                )
            stored = policy.with_version(
                (current.version or INITIAL_POLICY_VERSION) + 1
            ).with_etag(_new_etag())
            self._policies[project_id] = stored
        self.logger.info(
            f"Replaced IAM policy of project {project_id} (version {stored.version})"
        )
        return stored

    def has_permissions(
        self, project_id: str, permissions: Sequence[Permission]
    ) -> List[bool]:
        with self._lock:
            self._get_project(project_id)
        return [permission in self._granted for permission in permissions]
