"""Apply a single division toggle to a user's memberships."""

from domain.errors import UnknownDivisionError, UnknownOrganisationalUnitError
from domain.membership.model import has_selected_division
from domain.schemas import EditableUser, Identifier
from domain.taxonomy import TaxonomyIndex


def toggle_division(
    user: EditableUser,
    index: TaxonomyIndex,
    division_id: Identifier,
    ou_id: Identifier,
) -> EditableUser:
    """
    Toggle one division and bring the owning OU's membership in line.

    Pure: `user` is not modified. The division is removed if selected and
    appended otherwise. The OU is then present iff at least one of its
    divisions is still selected, so unselecting the last division of an OU
    drops the OU in the same step. Other OUs are untouched, a division
    belongs to exactly one OU.

    Raises:
        UnknownOrganisationalUnitError: If `ou_id` is not in the index
        UnknownDivisionError: If `division_id` is not one of the OU's divisions
    """
    if ou_id not in index:
        raise UnknownOrganisationalUnitError(ou_id)
    if division_id not in index.division_ids(ou_id):
        raise UnknownDivisionError(division_id, ou_id)

    if division_id in user.divisions:
        divisions = [d for d in user.divisions if d != division_id]
    else:
        divisions = [*user.divisions, division_id]

    still_selected = has_selected_division(index, ou_id, divisions)

    ous = list(user.ous)
    if still_selected and ou_id not in ous:
        ous.append(ou_id)
    elif not still_selected:
        # every copy goes, the record may list an OU more than once
        ous = [o for o in ous if o != ou_id]

    return user.model_copy(update={"divisions": divisions, "ous": ous})
