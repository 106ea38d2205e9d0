import math

import pytest

from bracketforge.exceptions import (
    InsufficientParticipantsException,
    InvalidConfigurationException,
)
from bracketforge.pairing.hybrid import assign_groups, generate_hybrid, placeholder_name
from bracketforge.pairing.seeding import round_count


def _ratings(count):
    return [2000 - 25 * i for i in range(count)]


def test_eight_participants_groups_of_four(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(8)), group_size=4, advancers_per_group=1)

    assert structure.format == "hybrid"
    assert len(structure.groups) == 2
    assert structure.total_rounds == 2

    group_stage, knockout = structure.rounds
    assert group_stage.name == "Group Stage"
    assert group_stage.stage == "group_stage"
    assert len(group_stage.matches) == 12
    assert [m.match_number for m in group_stage.matches] == list(range(1, 13))

    assert knockout.name == "Final"
    assert knockout.stage == "finals"
    (final,) = knockout.matches
    assert final.match_number == 13
    assert final.player1_name == "Group 1, rank 1"
    assert final.player2_name == "Group 2, rank 1"
    assert final.player1_id is None and final.player2_id is None


def test_groups_are_dealt_cyclically(make_seeded):
    seeded = make_seeded(_ratings(8))
    groups = assign_groups(seeded, 2)

    assert [s.seed for s in groups[0]] == [1, 3, 5, 7]
    assert [s.seed for s in groups[1]] == [2, 4, 6, 8]


def test_group_matches_stay_inside_groups(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(12)), group_size=4)
    group_of = {p.id: i for i, group in enumerate(structure.groups) for p in group}

    for match in structure.rounds[0].matches:
        assert group_of[match.player1_id] == group_of[match.player2_id]


@pytest.mark.parametrize(
    "count, group_size, advancers",
    [(8, 4, 1), (10, 4, 2), (5, 4, 1), (16, 4, 2), (9, 3, 1), (12, 3, 3)],
)
def test_hybrid_shape(make_seeded, count, group_size, advancers):
    structure = generate_hybrid(make_seeded(_ratings(count)), group_size, advancers)
    groups = math.ceil(count / group_size)

    assert len(structure.groups) == groups
    assert sum(len(g) for g in structure.groups) == count
    expected_group_matches = sum(len(g) * (len(g) - 1) // 2 for g in structure.groups)
    assert len(structure.rounds[0].matches) == expected_group_matches
    assert len(structure.rounds) - 1 == round_count(groups * advancers)

    numbers = [m.match_number for m in structure.all_matches()]
    assert numbers == list(range(1, len(numbers) + 1))


def test_placeholders_with_two_advancers(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(10)), group_size=4, advancers_per_group=2)
    first_knockout = structure.rounds[1]

    assert first_knockout.name == "Quarter Final"
    labels = [(m.player1_name, m.player2_name) for m in first_knockout.matches]
    assert labels == [
        ("Group 1, rank 1", "Group 1, rank 2"),
        ("Group 2, rank 1", "Group 2, rank 2"),
        ("Group 3, rank 1", "Group 3, rank 2"),
        (None, None),
    ]
    assert [r.name for r in structure.rounds[2:]] == ["Semi Final", "Final"]


def test_knockout_bye_slot(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(12)), group_size=4, advancers_per_group=1)
    first_knockout = structure.rounds[1]

    assert first_knockout.name == "Semi Final"
    second = first_knockout.matches[1]
    assert second.player1_name == "Group 3, rank 1"
    assert second.player2_name is None
    assert second.is_bye


def test_single_group_has_no_knockout(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(4)), group_size=4, advancers_per_group=1)

    assert len(structure.rounds) == 1
    assert structure.total_rounds == 1


def test_placeholder_name():
    assert placeholder_name(0, 1) == "Group 1, rank 1"
    assert placeholder_name(3, 2) == "Group 2, rank 2"
    assert placeholder_name(4, 2) == "Group 3, rank 1"


@pytest.mark.parametrize("group_size, advancers", [(1, 1), (4, 0), (4, 5)])
def test_invalid_group_settings(make_seeded, group_size, advancers):
    with pytest.raises(InvalidConfigurationException):
        generate_hybrid(make_seeded(_ratings(8)), group_size, advancers)


def test_fewer_participants_than_group_size(make_seeded):
    with pytest.raises(InsufficientParticipantsException):
        generate_hybrid(make_seeded(_ratings(3)), group_size=4)


@pytest.mark.parametrize("count, group_size, advancers", [(9, 4, 4), (5, 4, 3)])
def test_advancers_cannot_exceed_smallest_group(make_seeded, count, group_size, advancers):
    # groups of [3, 3, 3] and [3, 2] cannot supply that many advancers
    with pytest.raises(InvalidConfigurationException, match="smallest group"):
        generate_hybrid(make_seeded(_ratings(count)), group_size, advancers)


def test_advancers_equal_to_smallest_group(make_seeded):
    structure = generate_hybrid(make_seeded(_ratings(6)), group_size=4, advancers_per_group=3)

    assert [len(g) for g in structure.groups] == [3, 3]
    assert structure.rounds[1].name == "Quarter Final"
