"""Tests for billing weight resolution (no database)."""

import pytest
from uuid import uuid4

from apps.food_summaries.services import (
    ExtraHeadcount,
    InvalidInputError,
    resolve_participants,
)
from apps.food_summaries.services.participants import MAX_HEADCOUNT


A, B, C, D = uuid4(), uuid4(), uuid4(), uuid4()


class TestResolveParticipants:
    """Tests for resolve_participants()."""

    def test_owing_members_weigh_one(self):
        result = resolve_participants(members={A, B, C}, exempt=set(), owing={A, B, C})

        assert result.weights == {A: 1, B: 1, C: 1}
        assert result.total_weight == 3

    def test_extras_add_to_owing_member(self):
        result = resolve_participants(
            members={A, B, C},
            exempt={C},
            owing={A, B},
            extras=[ExtraHeadcount(member_id=B, headcount=2)],
        )

        assert result.weights == {A: 1, B: 3}
        assert result.total_weight == 4

    def test_exempt_member_billed_for_guests_only(self):
        result = resolve_participants(
            members={A, B, C},
            exempt={C},
            owing={A, B},
            extras=[
                ExtraHeadcount(member_id=A, headcount=1),
                ExtraHeadcount(member_id=C, headcount=2),
            ],
        )

        assert result.weights == {A: 2, B: 1, C: 2}
        assert result.total_weight == 5

    def test_exempt_member_without_guests_not_billed(self):
        result = resolve_participants(members={A, B}, exempt={B}, owing={A})

        assert B not in result.weights

    def test_repeated_extras_add_up(self):
        result = resolve_participants(
            members={A},
            exempt=set(),
            owing={A},
            extras=[
                ExtraHeadcount(member_id=A, headcount=1),
                ExtraHeadcount(member_id=A, headcount=3),
            ],
        )

        assert result.weights == {A: 5}

    def test_nobody_owing(self):
        with pytest.raises(InvalidInputError):
            resolve_participants(members={A}, exempt={A}, owing=set())

    def test_nobody_owing_even_with_exempt_guests(self):
        with pytest.raises(InvalidInputError):
            resolve_participants(
                members={A},
                exempt={A},
                owing=set(),
                extras=[ExtraHeadcount(member_id=A, headcount=2)],
            )

    def test_overlapping_sets(self):
        with pytest.raises(InvalidInputError, match='both'):
            resolve_participants(members={A, B}, exempt={A}, owing={A, B})

    def test_member_from_outside(self):
        with pytest.raises(InvalidInputError, match='not active members'):
            resolve_participants(members={A}, exempt=set(), owing={A, D})

    def test_member_left_out(self):
        with pytest.raises(InvalidInputError, match='neither'):
            resolve_participants(members={A, B, C}, exempt={C}, owing={A})

    @pytest.mark.parametrize('headcount', [0, -1, 1.5, True])
    def test_invalid_headcount(self, headcount):
        with pytest.raises(InvalidInputError):
            resolve_participants(
                members={A},
                exempt=set(),
                owing={A},
                extras=[ExtraHeadcount(member_id=A, headcount=headcount)],
            )

    def test_headcount_above_limit(self):
        with pytest.raises(InvalidInputError, match='exceed'):
            resolve_participants(
                members={A},
                exempt=set(),
                owing={A},
                extras=[ExtraHeadcount(member_id=A, headcount=MAX_HEADCOUNT + 1)],
            )

    def test_extras_for_member_not_at_lunch(self):
        with pytest.raises(InvalidInputError, match='related'):
            resolve_participants(
                members={A},
                exempt=set(),
                owing={A},
                extras=[ExtraHeadcount(member_id=D, headcount=1)],
            )
