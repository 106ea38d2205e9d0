from itertools import combinations

import pytest

from bracketforge.exceptions import InsufficientParticipantsException
from bracketforge.models import SeededParticipant
from bracketforge.pairing.round_robin import (
    expected_match_count,
    generate_round_robin,
    round_robin_matches,
)


def test_four_participants(make_seeded):
    structure = generate_round_robin(make_seeded([1500, 1400, 1300, 1200]))

    assert structure.format == "round_robin"
    assert structure.total_rounds == 1
    round_ = structure.rounds[0]
    assert round_.name == "Round Robin"
    assert round_.stage == "round_robin"
    assert [m.match_number for m in round_.matches] == [1, 2, 3, 4, 5, 6]
    assert [m.pair for m in round_.matches] == [
        ("p1", "p2"),
        ("p1", "p3"),
        ("p1", "p4"),
        ("p2", "p3"),
        ("p2", "p4"),
        ("p3", "p4"),
    ]


@pytest.mark.parametrize("count", [2, 3, 5, 8, 11])
def test_every_pair_meets_once(make_seeded, count):
    seeded = make_seeded([1000 + 7 * i for i in range(count)])
    structure = generate_round_robin(seeded)
    pairs = [frozenset(m.pair) for m in structure.all_matches()]

    assert len(pairs) == expected_match_count(count) == count * (count - 1) // 2
    assert set(pairs) == {frozenset((a.id, b.id)) for a, b in combinations(seeded, 2)}


def test_matches_carry_ratings_and_names(make_seeded):
    match = generate_round_robin(make_seeded([1500, 1400])).rounds[0].matches[0]

    assert match.player1_name == "Player 1"
    assert (match.player1_rating, match.player2_rating) == (1500, 1400)
    assert match.rating_gap == 100


def test_numbering_starts_where_asked(make_seeded):
    matches = round_robin_matches(make_seeded([1500, 1400, 1300]), 10, "Group Stage")

    assert [m.match_number for m in matches] == [10, 11, 12]
    assert {m.round_name for m in matches} == {"Group Stage"}


def test_single_participant_is_rejected(make_participants):
    lone = SeededParticipant(participant=make_participants([1500])[0], seed=1)
    with pytest.raises(InsufficientParticipantsException):
        generate_round_robin([lone])
