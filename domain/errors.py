"""Domain-level exceptions."""

from collections.abc import Sequence

from domain.schemas import Identifier


class MalformedTaxonomyError(ValueError):
    """Raised when the division list cannot be grouped (e.g. a division has no OU)."""


class MembershipError(ValueError):
    """Base class for invalid membership operations."""


class UnknownOrganisationalUnitError(MembershipError):
    def __init__(self, ou_id: Identifier) -> None:
        super().__init__(f"Unknown organisational unit: {ou_id!r}")
        self.ou_id = ou_id


class UnknownDivisionError(MembershipError):
    def __init__(self, division_id: Identifier, ou_id: Identifier) -> None:
        super().__init__(f"Division {division_id!r} does not belong to organisational unit {ou_id!r}")
        self.division_id = division_id
        self.ou_id = ou_id


class MembershipInvariantError(MembershipError):
    """OU memberships do not match the selected divisions."""

    def __init__(self, violations: Sequence[Identifier]) -> None:
        super().__init__(
            "OU memberships are inconsistent with selected divisions for: "
            + ", ".join(repr(v) for v in violations)
        )
        self.violations = list(violations)
