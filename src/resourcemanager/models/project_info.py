"""Project metadata Pydantic models for the Resource Manager client."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing_extensions import Annotated

from ...service.exceptions import ProjectValidationError
from ..utils.validators import validate_labels, validate_project_id, validate_project_name

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class State(str, Enum):
    """Project lifecycle states reported by the resource manager."""

    LIFECYCLE_STATE_UNSPECIFIED = "LIFECYCLE_STATE_UNSPECIFIED"
    ACTIVE = "ACTIVE"
    DELETE_REQUESTED = "DELETE_REQUESTED"
    DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"


class ResourceId(BaseModel):
    """Reference to the resource owning a project (e.g. an organization)."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    id: Annotated[str, Field(min_length=1, description="Identifier of the parent")]
    type: Annotated[
        str,
        Field(
            min_length=1,
            description="Type of the parent resource",
            examples=["organization", "folder"],
        ),
    ]

    @classmethod
    def of(cls, id: str, type: str) -> "ResourceId":
        return cls(id=id, type=type)


class ProjectInfo(BaseModel):
    """
    Metadata snapshot of a project.

    Instances are immutable, labels included; ``derive`` and the
    ``with_*``/``without_*`` helpers return validated copies. Server-owned
    fields (number, creation time, state) are only meaningful on snapshots
    returned by the resource manager.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    id: Annotated[
        str,
        Field(
            description="Unique, user-assigned project id",
            examples=["project-id", "my-analysis-42"],
        ),
    ]
    name: Annotated[
        Optional[str], Field(description="Human-readable project name")
    ] = None
    labels: Annotated[
        Mapping[str, str],
        Field(
            default_factory=dict,
            validate_default=True,
            description="User-assigned labels, read-only",
        ),
    ]
    number: Annotated[
        Optional[int], Field(ge=0, description="Server-assigned project number")
    ] = None
    create_time_millis: Annotated[
        Optional[int],
        Field(ge=0, description="Creation time in milliseconds since the epoch"),
    ] = None
    state: Annotated[Optional[State], Field(description="Lifecycle state")] = None
    parent: Annotated[
        Optional[ResourceId], Field(description="Resource owning the project")
    ] = None

    @field_validator("id")
    @classmethod
    def validate_id_format(cls, v: str) -> str:
        """Validate the project id using the centralized validator."""
        try:
            return validate_project_id(v)
        except ProjectValidationError as e:
            raise ValueError(str(e))

    @field_validator("name")
    @classmethod
    def validate_name_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            return validate_project_name(v)
        except ProjectValidationError as e:
            raise ValueError(str(e))

    @field_validator("labels")
    @classmethod
    def validate_label_entries(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Validate labels and store them behind a read-only view."""
        try:
            return MappingProxyType(validate_labels(dict(v)))
        except ProjectValidationError as e:
            raise ValueError(str(e))

    @field_serializer("labels")
    def serialize_labels(self, labels: Mapping[str, str]) -> Dict[str, str]:
        return dict(labels)

    def __hash__(self) -> int:
        return hash(
            (
                self.id,
                self.name,
                frozenset(self.labels.items()),
                self.number,
                self.create_time_millis,
                self.state,
                self.parent,
            )
        )

    @property
    def create_time(self) -> Optional[datetime]:
        """Creation time as an aware UTC datetime."""
        if self.create_time_millis is None:
            return None
        return _EPOCH + timedelta(milliseconds=self.create_time_millis)

    def derive(self, **changes: Any) -> "ProjectInfo":
        """
        Return a validated copy with ``changes`` applied.

        Raises:
            pydantic.ValidationError: If the resulting snapshot is invalid
        """
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data["labels"] = dict(self.labels)
        data.update(changes)
        return self.model_validate(data)

    def with_label(self, key: str, value: str) -> "ProjectInfo":
        """Return a copy with ``key`` set to ``value``, replacing any existing value."""
        return self.derive(labels={**self.labels, key: value})

    def without_label(self, key: str) -> "ProjectInfo":
        """Return a copy without the label ``key``; missing keys are ignored."""
        return self.derive(labels={k: v for k, v in self.labels.items() if k != key})

    def with_name(self, name: Optional[str]) -> "ProjectInfo":
        return self.derive(name=name)

    def with_parent(self, parent: Optional[ResourceId]) -> "ProjectInfo":
        return self.derive(parent=parent)

    def with_state(self, state: State) -> "ProjectInfo":
        return self.derive(state=state)
