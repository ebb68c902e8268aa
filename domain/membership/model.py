"""OU membership derived from division membership."""

from collections.abc import Iterable

from domain.errors import MembershipInvariantError
from domain.schemas import EditableUser, Identifier
from domain.taxonomy import TaxonomyIndex


def has_selected_division(index: TaxonomyIndex, ou_id: Identifier, divisions: Iterable[Identifier]) -> bool:
    """True iff any division of `ou_id` is in `divisions` (full re-scan of the OU's divisions)."""
    selected = set(divisions)
    return any(division_id in selected for division_id in index.division_ids(ou_id))


def derive_ous(divisions: Iterable[Identifier], index: TaxonomyIndex) -> list[Identifier]:
    """Return the OU ids that have at least one selected division, in index order."""
    selected = set(divisions)
    return [ou_id for ou_id in index if has_selected_division(index, ou_id, selected)]


def membership_violations(user: EditableUser, index: TaxonomyIndex) -> list[Identifier]:
    """
    List OU ids whose membership disagrees with the selected divisions.

    An OU is reported when it is present without a selected division, or absent
    while one of its divisions is selected. OUs unknown to the index count as
    present without a selected division.
    """
    expected = derive_ous(user.divisions, index)
    expected_set = set(expected)
    present = set(user.ous)

    violations: list[Identifier] = [ou_id for ou_id in expected if ou_id not in present]
    for ou_id in user.ous:
        if ou_id not in expected_set and ou_id not in violations:
            violations.append(ou_id)
    return violations


def check_membership(user: EditableUser, index: TaxonomyIndex) -> None:
    violations = membership_violations(user, index)
    if violations:
        raise MembershipInvariantError(violations)


def reconcile_ous(user: EditableUser, index: TaxonomyIndex) -> EditableUser:
    """
    Return a copy of `user` whose OUs match its divisions.

    Still-valid OUs keep their position; OUs that became required are appended
    in index order.
    """
    expected = derive_ous(user.divisions, index)
    expected_set = set(expected)
    kept: list[Identifier] = []
    for ou_id in user.ous:
        if ou_id in expected_set and ou_id not in kept:
            kept.append(ou_id)
    kept.extend(ou_id for ou_id in expected if ou_id not in kept)
    return user.model_copy(update={"ous": kept})
