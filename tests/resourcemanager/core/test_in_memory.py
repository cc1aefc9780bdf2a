"""Tests for the resourcemanager.core.in_memory module."""

import pytest

from src.resourcemanager.core.in_memory import INITIAL_POLICY_VERSION, InMemoryResourceManager
from src.resourcemanager.managers.project import Project
from src.resourcemanager.models.permission import Permission
from src.resourcemanager.models.policy import Binding, Member, Role
from src.resourcemanager.models.project_info import ProjectInfo, ResourceId, State
from src.service.exceptions import (
    PermissionDeniedError,
    PolicyConflictError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
    ProjectStateError,
)

CREATE_TIME = 1700000000000


@pytest.fixture
def manager() -> InMemoryResourceManager:
    return InMemoryResourceManager(clock=lambda: CREATE_TIME)


@pytest.fixture
def created(manager) -> ProjectInfo:
    return manager.create(
        ProjectInfo(
            id="project-id",
            name="myProj",
            labels={"k1": "v1"},
            parent=ResourceId.of("owner-id", "organization"),
        )
    )


def test_create_assigns_server_fields(created):
    """Test create fills in number, creation time and state."""
    assert created.number == 1
    assert created.create_time_millis == CREATE_TIME
    assert created.state == State.ACTIVE


def test_create_seeds_empty_policy(manager, created):
    """Test new projects start with an empty policy."""
    policy = manager.get_iam_policy(created.id)
    assert policy.bindings == frozenset()
    assert policy.version == INITIAL_POLICY_VERSION
    assert policy.etag


def test_create_duplicate(manager, created):
    """Test duplicate ids are rejected."""
    with pytest.raises(ProjectAlreadyExistsError):
        manager.create(ProjectInfo(id=created.id))


def test_get_and_list(manager, created):
    """Test get and list_projects."""
    other = manager.create(ProjectInfo(id="another-project"))
    assert manager.get(created.id) == created
    assert manager.list_projects() == [other, created]
    assert other.number == 2


def test_unknown_project(manager):
    """Test every project operation reports unknown ids."""
    for operation in (
        manager.get,
        manager.get_iam_policy,
        manager.delete,
        manager.undelete,
    ):
        with pytest.raises(ProjectNotFoundError):
            operation("missing-project")
    with pytest.raises(ProjectNotFoundError):
        manager.has_permissions("missing-project", [Permission.GET])


def test_delete_undelete_lifecycle(manager, created):
    """Test delete/undelete transitions and their invalid states."""
    manager.delete(created.id)
    assert manager.get(created.id).state == State.DELETE_REQUESTED

    with pytest.raises(ProjectStateError):
        manager.delete(created.id)

    manager.undelete(created.id)
    assert manager.get(created.id).state == State.ACTIVE

    with pytest.raises(ProjectStateError):
        manager.undelete(created.id)


def test_replace_keeps_server_fields(manager, created):
    """Test replace only takes user-editable fields."""
    request = ProjectInfo(id=created.id, name="renamed", labels={"k2": "v2"})

    stored = manager.replace(request)

    assert stored.name == "renamed"
    assert stored.labels == {"k2": "v2"}
    assert stored.number == created.number
    assert stored.create_time_millis == created.create_time_millis
    assert stored.state == State.ACTIVE
    assert stored.parent == created.parent
    assert manager.get(created.id) == stored


def test_replace_inactive_project(manager, created):
    """Test projects pending deletion cannot be replaced."""
    manager.delete(created.id)
    with pytest.raises(ProjectStateError):
        manager.replace(created.with_label("k3", "v3"))


def test_replace_iam_policy(manager, created):
    """Test policy replacement bumps the version and issues a new etag."""
    current = manager.get_iam_policy(created.id)
    binding = Binding(role=Role.OWNER, members=[Member.user("owner@email.com")])

    stored = manager.replace_iam_policy(created.id, current.with_binding(binding))

    assert stored.bindings == {binding}
    assert stored.version == current.version + 1
    assert stored.etag != current.etag
    assert manager.get_iam_policy(created.id) == stored


def test_replace_iam_policy_stale_etag(manager, created):
    """Test a stale etag is rejected and the stored policy kept."""
    current = manager.get_iam_policy(created.id)
    manager.replace_iam_policy(created.id, current)

    with pytest.raises(PolicyConflictError):
        manager.replace_iam_policy(created.id, current)


def test_replace_iam_policy_without_etag(manager, created):
    """Test a policy without an etag overwrites unconditionally."""
    current = manager.get_iam_policy(created.id)
    stored = manager.replace_iam_policy(created.id, current.with_etag(None))
    assert stored.version == current.version + 1


def test_has_permissions():
    """Test permission answers follow the granted set and request order."""
    manager = InMemoryResourceManager(granted_permissions=[Permission.CREATE, Permission.GET])
    manager.create(ProjectInfo(id="project-id"))

    assert manager.has_permissions("project-id", [Permission.REPLACE, Permission.GET]) == [
        False,
        True,
    ]


def test_project_handle_against_in_memory(manager, created):
    """Test the project handle end to end."""
    project = Project.load(manager, created.id)

    renamed = project.replace(created.with_name("renamed"))
    assert renamed.info.name == "renamed"
    assert renamed.policy == project.policy

    binding = Binding(role=Role.VIEWER, members=[Member.all_authenticated_users()])
    updated = renamed.replace_iam_policy(renamed.policy.with_binding(binding))
    assert binding in updated.policy.bindings
    assert updated.info == renamed.info

    updated.delete()
    assert updated.info.state == State.ACTIVE
    assert updated.reload().info.state == State.DELETE_REQUESTED

    updated.undelete()
    assert updated.reload().info.state == State.ACTIVE
    assert updated.has_all_permissions(Permission.GET, Permission.DELETE)


def test_operations_require_permission():
    """Test operations whose permission is not granted are refused without side effects."""
    manager = InMemoryResourceManager(
        granted_permissions=[Permission.CREATE, Permission.GET], clock=lambda: CREATE_TIME
    )
    created = manager.create(ProjectInfo(id="project-id"))

    with pytest.raises(PermissionDeniedError):
        manager.delete(created.id)
    with pytest.raises(PermissionDeniedError):
        manager.replace(created.with_name("renamed"))
    with pytest.raises(PermissionDeniedError):
        manager.replace_iam_policy(created.id, manager.get_iam_policy(created.id))
    with pytest.raises(PermissionDeniedError):
        manager.list_projects()

    assert manager.get(created.id) == created
    assert manager.get_iam_policy(created.id).version == INITIAL_POLICY_VERSION


def test_project_handle_denied_delete():
    """Test the handle surfaces a denied delete unchanged."""
    manager = InMemoryResourceManager(granted_permissions=[Permission.CREATE, Permission.GET])
    manager.create(ProjectInfo(id="project-id"))
    project = Project.load(manager, "project-id")

    with pytest.raises(PermissionDeniedError):
        project.delete()
    assert project.has_permissions(Permission.DELETE, Permission.GET) == [False, True]
    assert project.reload().info.state == State.ACTIVE


def test_stored_labels_cannot_be_edited(manager, created):
    """Test snapshots returned by the manager are read-only."""
    with pytest.raises(TypeError):
        manager.get(created.id).labels["k9"] = "v9"
    assert manager.get(created.id).labels == {"k1": "v1"}
