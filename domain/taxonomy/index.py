"""Read-only grouping of divisions by their owning organisational unit."""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from domain.errors import MalformedTaxonomyError
from domain.schemas import Division, Identifier, OrganisationalUnit


@dataclass(frozen=True)
class DivisionGroup:
    """One OU and its divisions, in the order they were received."""

    ou: OrganisationalUnit
    divisions: tuple[Division, ...]

    @property
    def division_ids(self) -> tuple[Identifier, ...]:
        return tuple(d.id for d in self.divisions)


class TaxonomyIndex(Mapping[Identifier, DivisionGroup]):
    """
    Mapping of OU id -> DivisionGroup.

    Built once per session with `build_taxonomy_index` and never mutated.
    The OU set is not stored separately; `ous` is a view over the groups.
    """

    def __init__(self, groups: Mapping[Identifier, DivisionGroup]) -> None:
        self._groups = MappingProxyType(dict(groups))

    def __getitem__(self, ou_id: Identifier) -> DivisionGroup:
        return self._groups[ou_id]

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k!r}: {len(g.divisions)}" for k, g in self._groups.items())
        return f"TaxonomyIndex({{{sizes}}})"

    def groups(self) -> list[DivisionGroup]:
        return list(self._groups.values())

    @property
    def ous(self) -> tuple[OrganisationalUnit, ...]:
        return tuple(g.ou for g in self._groups.values())

    def division_ids(self, ou_id: Identifier) -> tuple[Identifier, ...]:
        return self._groups[ou_id].division_ids

    def find_division(self, division_id: Identifier) -> Division | None:
        """Return the first division with this id, or None."""
        for group in self._groups.values():
            for division in group.divisions:
                if division.id == division_id:
                    return division
        return None

    def owner_of(self, division_id: Identifier) -> Identifier | None:
        division = self.find_division(division_id)
        if division is None or division.ou is None:
            return None
        return division.ou.id


def build_taxonomy_index(divisions: Sequence[Division]) -> TaxonomyIndex:
    """
    Group a flat division list by owning OU.

    Single pass in input order. Groups appear in order of first appearance and
    each group keeps its divisions in arrival order. Duplicate divisions are
    kept, not collapsed.

    Raises:
        MalformedTaxonomyError: If a division carries no OU reference
    """
    order: list[Identifier] = []
    ous: dict[Identifier, OrganisationalUnit] = {}
    members: dict[Identifier, list[Division]] = {}

    for position, division in enumerate(divisions):
        if division.ou is None:
            raise MalformedTaxonomyError(
                f"Division {division.id!r} (position {position}) has no organisational unit reference"
            )
        ou_id = division.ou.id
        if ou_id not in members:
            order.append(ou_id)
            ous[ou_id] = division.ou
            members[ou_id] = []
        members[ou_id].append(division)

    return TaxonomyIndex({ou_id: DivisionGroup(ou=ous[ou_id], divisions=tuple(members[ou_id])) for ou_id in order})
