from unittest.mock import MagicMock

import pytest

from src.resourcemanager.core.resource_manager import ResourceManager
from src.resourcemanager.managers.project import Project
from src.resourcemanager.models.policy import Binding, Member, Policy, Role
from src.resourcemanager.models.project_info import ProjectInfo, ResourceId, State

PROJECT_ID = "project-id"


@pytest.fixture
def project_info() -> ProjectInfo:
    return ProjectInfo(
        id=PROJECT_ID,
        name="myProj",
        labels={"k1": "v1", "k2": "v2"},
        number=123,
        create_time_millis=123456789,
        state=State.DELETE_REQUESTED,
        parent=ResourceId.of("owner-id", "organization"),
    )


@pytest.fixture
def owner_binding() -> Binding:
    return Binding(
        role=Role.OWNER,
        members=[Member.user("first-owner@email.com"), Member.group("group-of-owners@email.com")],
    )


@pytest.fixture
def editor_binding() -> Binding:
    return Binding(role=Role.EDITOR, members=[Member.service_account("editor@someemail.com")])


@pytest.fixture
def viewer_binding() -> Binding:
    return Binding(
        role=Role.VIEWER,
        members=[Member.service_account("app@someemail.com"), Member.user("viewer@email.com")],
    )


@pytest.fixture
def policy(owner_binding, editor_binding, viewer_binding) -> Policy:
    return Policy(
        bindings=[owner_binding, editor_binding, viewer_binding],
        version=1,
        etag="some-etag-value",
    )


@pytest.fixture
def mock_resource_manager() -> MagicMock:
    """A ResourceManager mock; tests assert its full call list."""
    return MagicMock(spec=ResourceManager)


@pytest.fixture
def project(mock_resource_manager, project_info, policy) -> Project:
    return Project(mock_resource_manager, project_info, policy)
