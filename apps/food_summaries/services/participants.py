"""
Participant resolution.

Turns the people at a lunch into billing weights:

    owing member (did not bring food)   weight = 1 + guests they hosted
    exempt member (brought food)        weight = guests they hosted
    exempt member without guests        not billed at all

Example:
    A and B did not bring food, B hosted 2 guests, C brought food::

        weights = resolve_participants(
            members={a, b, c},
            exempt={c},
            owing={a, b},
            extras=[ExtraHeadcount(member_id=b, headcount=2)],
        )
        weights.weights       # {a: 1, b: 3}
        weights.total_weight  # 4
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable
from uuid import UUID

from .exceptions import InvalidInputError

MAX_HEADCOUNT = 1000


@dataclass(frozen=True)
class ExtraHeadcount:
    """Guests hosted by one member at a lunch."""
    member_id: UUID
    headcount: int


@dataclass(frozen=True)
class ParticipantWeights:
    """Billing weight per participating member."""
    weights: Dict[UUID, int] = field(default_factory=dict)

    @property
    def total_weight(self) -> int:
        return sum(self.weights.values())


def resolve_participants(
    *,
    members: AbstractSet[UUID],
    exempt: AbstractSet[UUID],
    owing: AbstractSet[UUID],
    extras: Iterable[ExtraHeadcount] = ()
) -> ParticipantWeights:
    """
    Compute the billing weight of every member who pays for a lunch.

    ``exempt`` and ``owing`` must partition ``members``: no member in
    both, none left out, nobody from outside.

    Args:
        members: Every member considered for the lunch
        exempt: Members who brought their own food
        owing: Members who did not bring food
        extras: Guests hosted by members of either set; several
            entries for the same member add up

    Returns:
        ParticipantWeights with a positive weight per billed member

    Raises:
        InvalidInputError: If nobody owes, the sets overlap or do not
            cover ``members``, an extras entry points outside the lunch,
            or a headcount is below one or above MAX_HEADCOUNT
    """
    members = set(members)
    exempt = set(exempt)
    owing = set(owing)
    extras = list(extras)

    if not owing:
        raise InvalidInputError("At least one member must be billed for the food")

    overlap = exempt & owing
    if overlap:
        raise InvalidInputError(
            f"{len(overlap)} member(s) cannot both bring and not bring food"
        )

    outsiders = (exempt | owing) - members
    if outsiders:
        raise InvalidInputError(
            f"{len(outsiders)} member(s) are not active members of this company"
        )

    unassigned = members - exempt - owing
    if unassigned:
        raise InvalidInputError(
            f"{len(unassigned)} member(s) are neither marked as bringing food nor as billed"
        )

    hosted: Dict[UUID, int] = {}
    for extra in extras:
        headcount = extra.headcount
        if isinstance(headcount, bool) or not isinstance(headcount, int) or headcount < 1:
            raise InvalidInputError("Number of extra people must be at least 1")
        if headcount > MAX_HEADCOUNT:
            raise InvalidInputError(f"Number of extra people cannot exceed {MAX_HEADCOUNT}")
        if extra.member_id not in exempt and extra.member_id not in owing:
            raise InvalidInputError("Extra people must be related to a member at this lunch")
        hosted[extra.member_id] = hosted.get(extra.member_id, 0) + headcount

    weights = {member_id: 1 + hosted.get(member_id, 0) for member_id in owing}
    for member_id in exempt:
        if member_id in hosted:
            weights[member_id] = hosted[member_id]

    return ParticipantWeights(weights=weights)
