"""Pydantic models for users, organisational units and divisions."""

from enum import Enum
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

# Identifiers arrive as strings from the backend but may be numeric references
Identifier: TypeAlias = str | int

# Revision marker sent on every update; the server-assigned one is not reused
REVISION_BASELINE = 0


class Role(str, Enum):
    """Roles a user can hold."""

    NORMAL = "Normal"
    MANAGEMENT = "Management"
    ADMIN = "Admin"


class OrganisationalUnit(BaseModel):
    """Parent group of divisions (OU)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Identifier = Field(..., alias="_id")
    name: str = ""


class Division(BaseModel):
    """Leaf membership unit, carrying its owning OU inline."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Identifier = Field(..., alias="_id")
    name: str = ""
    ou: OrganisationalUnit | None = Field(
        default=None,
        description="Owning OU. Required by the taxonomy index; left optional so the index can report it.",
    )


class Reference(BaseModel):
    """Populated reference to another document (only the id is kept when editing)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Identifier = Field(..., alias="_id")


class UserRecord(BaseModel):
    """User as returned by the backend, with divisions and OUs populated."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    username: str
    password: str | None = None
    role: Role
    divisions: list[Reference] = Field(default_factory=list)
    ous: list[Reference] = Field(default_factory=list)
    revision: int | None = Field(default=None, alias="__v")


class EditableUser(BaseModel):
    """Flattened user held by an edit session: memberships are bare identifiers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    password: str | None = None
    role: Role
    divisions: list[Identifier] = Field(default_factory=list)
    ous: list[Identifier] = Field(default_factory=list)
    revision: int = Field(default=REVISION_BASELINE, alias="__v")


class CallerIdentity(BaseModel):
    """Identity of the operator running the session. Unknown fields are kept as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    username: str | None = None
    role: Role
    revision: int | None = Field(default=None, alias="__v")

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
