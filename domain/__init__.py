"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for users, OUs and divisions
- taxonomy: Grouping of divisions by organisational unit
- membership: OU/division consistency rules and the division toggle
"""

from domain.schemas import (
    REVISION_BASELINE,
    CallerIdentity,
    Division,
    EditableUser,
    Identifier,
    OrganisationalUnit,
    Role,
    UserRecord,
)

__all__ = [
    "Role",
    "Identifier",
    "OrganisationalUnit",
    "Division",
    "UserRecord",
    "EditableUser",
    "CallerIdentity",
    "REVISION_BASELINE",
]
