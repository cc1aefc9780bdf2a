"""IAM policy Pydantic models for the Resource Manager client"""

from enum import Enum
from typing import Any, FrozenSet, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Annotated

from ...service.exceptions import PolicyValidationError
from ..utils.validators import validate_role


class MemberType(str, Enum):
    """Kinds of principals that can appear in a binding."""

    USER = "user"
    GROUP = "group"
    SERVICE_ACCOUNT = "serviceAccount"
    DOMAIN = "domain"
    ALL_USERS = "allUsers"
    ALL_AUTHENTICATED_USERS = "allAuthenticatedUsers"


# Member types that stand for every caller and carry no identifier
_WILDCARD_MEMBER_TYPES = {MemberType.ALL_USERS, MemberType.ALL_AUTHENTICATED_USERS}


class Role(str, Enum):
    """Primitive project roles."""

    OWNER = "roles/owner"
    EDITOR = "roles/editor"
    VIEWER = "roles/viewer"


_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _validated_copy(model: _ModelT, **changes: Any) -> _ModelT:
    """Rebuild ``model`` with ``changes`` applied, running full validation."""
    data = {name: getattr(model, name) for name in type(model).model_fields}
    data.update(changes)
    return model.model_validate(data)


class Member(BaseModel):
    """A principal referenced by a policy binding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Annotated[MemberType, Field(description="Kind of principal")]
    value: Annotated[
        Optional[str],
        Field(
            description="Principal identifier (email or domain), absent for allUsers/allAuthenticatedUsers",
            examples=["first-owner@email.com", "example.com"],
        ),
    ] = None

    @model_validator(mode="after")
    def check_value(self) -> "Member":
        if self.type in _WILDCARD_MEMBER_TYPES:
            if self.value is not None:
                raise ValueError(f"{self.type.value} members do not take a value")
        elif not self.value or not self.value.strip():
            raise ValueError(f"{self.type.value} members require a value")
        return self

    @classmethod
    def user(cls, email: str) -> "Member":
        return cls(type=MemberType.USER, value=email)

    @classmethod
    def group(cls, email: str) -> "Member":
        return cls(type=MemberType.GROUP, value=email)

    @classmethod
    def service_account(cls, email: str) -> "Member":
        return cls(type=MemberType.SERVICE_ACCOUNT, value=email)

    @classmethod
    def domain(cls, domain: str) -> "Member":
        return cls(type=MemberType.DOMAIN, value=domain)

    @classmethod
    def all_users(cls) -> "Member":
        return cls(type=MemberType.ALL_USERS)

    @classmethod
    def all_authenticated_users(cls) -> "Member":
        return cls(type=MemberType.ALL_AUTHENTICATED_USERS)

    def __str__(self) -> str:
        if self.value is None:
            return self.type.value
        return f"{self.type.value}:{self.value}"


class Binding(BaseModel):
    """A role granted to a set of members."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Annotated[
        str,
        Field(
            description="Role granted to the members",
            examples=[Role.OWNER.value, "projects/my-project/roles/auditor"],
        ),
    ]
    members: Annotated[
        FrozenSet[Member],
        Field(default_factory=frozenset, description="Members holding the role"),
    ]

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Union[Role, str]) -> str:
        """Store primitive roles by their string name."""
        if isinstance(v, Role):
            return v.value
        return v

    @field_validator("role")
    @classmethod
    def validate_role_format(cls, v: str) -> str:
        """Validate the role name using the centralized validator."""
        try:
            return validate_role(v)
        except PolicyValidationError as e:
            raise ValueError(str(e))

    def with_member(self, member: Member) -> "Binding":
        """Return a copy of this binding that also grants the role to ``member``."""
        return _validated_copy(self, members=self.members | {member})

    def without_member(self, member: Member) -> "Binding":
        """Return a copy of this binding without ``member``."""
        return _validated_copy(self, members=self.members - {member})


class Policy(BaseModel):
    """
    Access-control policy attached to a project.

    A policy is a set of bindings plus a version and an etag. The etag is
    an opaque token used for optimistic concurrency: a policy read from the
    service and written back with the same etag is only accepted if nobody
    changed it in between. More than one binding per role is allowed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bindings: Annotated[
        FrozenSet[Binding],
        Field(default_factory=frozenset, description="Role bindings of the policy"),
    ]
    version: Annotated[
        Optional[int], Field(ge=0, description="Policy version")
    ] = None
    etag: Annotated[
        Optional[str],
        Field(description="Opaque token for concurrency control"),
    ] = None

    @property
    def roles(self) -> FrozenSet[str]:
        """Roles granted by at least one binding."""
        return frozenset(binding.role for binding in self.bindings)

    def members_for(self, role: Union[Role, str]) -> FrozenSet[Member]:
        """Get every member holding ``role`` across all bindings."""
        role = role.value if isinstance(role, Role) else role
        members: FrozenSet[Member] = frozenset()
        for binding in self.bindings:
            if binding.role == role:
                members = members | binding.members
        return members

    def with_binding(self, binding: Binding) -> "Policy":
        """Return a copy of this policy with ``binding`` added."""
        return _validated_copy(self, bindings=self.bindings | {binding})

    def without_binding(self, binding: Binding) -> "Policy":
        """Return a copy of this policy with ``binding`` removed."""
        return _validated_copy(self, bindings=self.bindings - {binding})

    def with_version(self, version: int) -> "Policy":
        return _validated_copy(self, version=version)

    def with_etag(self, etag: Optional[str]) -> "Policy":
        return _validated_copy(self, etag=etag)
