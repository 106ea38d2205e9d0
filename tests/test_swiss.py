import pytest

from bracketforge.exceptions import (
    AllRoundsCompleteException,
    InsufficientParticipantsException,
    InvalidConfigurationException,
    RoundNotCompletedException,
)
from bracketforge.models import MatchResult, Participant, SwissConfig, SwissParticipant
from bracketforge.models.swiss import SwissState
from bracketforge.pairing.swiss import (
    calculate_rounds,
    group_by_points,
    pair_score_groups,
)
from bracketforge.tournament.swiss_tournament import (
    apply_results,
    calculate_final_ranking,
    create_swiss_state,
    generate_next_round,
    is_complete,
    replay_swiss_state,
)


def _higher_rated_wins(round_):
    results = []
    for match in round_.matches:
        winner = (
            match.player1_id
            if match.player1_rating >= match.player2_rating
            else match.player2_id
        )
        results.append(MatchResult(match.player1_id, match.player2_id, winner_id=winner))
    return results


def _swiss_player(player_id, rating, points=0.0, opponents=()):
    return SwissParticipant(
        participant=Participant(id=player_id, name=player_id.upper(), rating=rating),
        points=points,
        opponents=list(opponents),
    )


@pytest.mark.parametrize(
    "count, rounds",
    [
        (1, 1),
        (2, 1),
        (3, 2),
        (4, 2),
        (5, 3),
        (8, 3),
        (16, 4),
        (32, 5),
        (64, 6),
        (128, 7),
        (129, 8),
        (200, 8),
        (300, 9),
    ],
)
def test_calculate_rounds(count, rounds):
    assert calculate_rounds(count) == rounds


def test_first_round_pairs_top_half_with_bottom_half(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))
    round_ = state.get_round(1)

    assert [(m.player1_rating, m.player2_rating) for m in round_.matches] == [
        (2000, 1600),
        (1900, 1500),
        (1800, 1400),
        (1700, 1300),
    ]
    assert round_.unpaired_ids == []
    assert [m.round_name for m in round_.matches] == ["Round 1"] * 4
    assert state.total_rounds == 3
    assert state.current_round == 1


def test_first_round_ignores_input_order(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(list(reversed(descending_ratings))))

    assert [m.player1_rating for m in state.get_round(1).matches] == [2000, 1900, 1800, 1700]


def test_five_participants_leave_one_unpaired(make_participants):
    state = create_swiss_state(make_participants([1500, 1450, 1400, 1350, 1300]))
    first = state.get_round(1)

    assert len(first.matches) == 2
    assert first.unpaired_ids == ["p5"]

    state = apply_results(state, 1, _higher_rated_wins(first))
    state, second = generate_next_round(state)

    assert len(second.matches) == 2
    assert len(second.unpaired_ids) == 1
    assert second.round_number == 2
    assert [m.match_number for m in second.matches] == [3, 4]


def test_next_round_requires_results(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))

    with pytest.raises(RoundNotCompletedException):
        generate_next_round(state)


def test_no_round_after_the_last(make_participants):
    state = create_swiss_state(make_participants([1500, 1400, 1300, 1200]))
    state = apply_results(state, 1, _higher_rated_wins(state.get_round(1)))
    state, second = generate_next_round(state)
    state = apply_results(state, 2, _higher_rated_wins(second))

    assert is_complete(state)
    with pytest.raises(AllRoundsCompleteException):
        generate_next_round(state)


def test_operations_leave_the_input_state_alone(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))
    before = state.to_dict()

    after_results = apply_results(state, 1, _higher_rated_wins(state.get_round(1)))
    generate_next_round(after_results)

    assert state.to_dict() == before
    assert after_results.get_round(1).is_completed
    assert after_results.current_round == 1


def test_points_accumulate_and_buchholz_uses_current_points(make_participants):
    state = create_swiss_state(make_participants([1500, 1400, 1300, 1200]))
    # round 1: p1 v p3, p2 v p4
    state = apply_results(
        state,
        1,
        [
            MatchResult("p1", "p3", winner_id="p1"),
            MatchResult("p2", "p4", is_draw=True),
        ],
    )
    by_id = state.participants_by_id

    assert by_id["p1"].points == 1.0
    assert by_id["p3"].points == 0.0
    assert by_id["p2"].points == by_id["p4"].points == 0.5
    assert by_id["p3"].buchholz == 1.0
    assert by_id["p1"].buchholz == 0.0
    assert by_id["p1"].opponents == ["p3"]
    assert by_id["p1"].history[0].outcome == "win"
    assert by_id["p2"].history[0].points == 0.5


def test_rematches_are_avoided_when_disabled():
    players = [
        _swiss_player("a", 1500, 1, ["b"]),
        _swiss_player("b", 1490, 1, ["a"]),
        _swiss_player("c", 1300, 1),
        _swiss_player("d", 1290, 1),
    ]
    round_ = pair_score_groups(players, SwissConfig(), 2, 1)

    assert [m.pair for m in round_.matches] == [("a", "c"), ("b", "d")]


def test_rematches_allowed_when_enabled():
    players = [
        _swiss_player("a", 1500, 1, ["b"]),
        _swiss_player("b", 1490, 1, ["a"]),
        _swiss_player("c", 1300, 1),
        _swiss_player("d", 1290, 1),
    ]
    round_ = pair_score_groups(players, SwissConfig(allow_rematch=True), 2, 1)

    assert [m.pair for m in round_.matches] == [("a", "b"), ("c", "d")]


def test_rating_variance_limits_pairings():
    players = [_swiss_player("a", 1800), _swiss_player("b", 1400)]
    round_ = pair_score_groups(players, SwissConfig(max_rating_variance=300), 2, 1)

    assert round_.matches == []
    assert round_.unpaired_ids == ["a", "b"]


def test_score_groups_are_not_mixed():
    players = [
        _swiss_player("a", 1500, 2),
        _swiss_player("b", 1490, 1),
        _swiss_player("c", 1480, 1),
        _swiss_player("d", 1470, 0),
    ]
    round_ = pair_score_groups(players, SwissConfig(), 3, 5)

    assert [m.pair for m in round_.matches] == [("b", "c")]
    assert round_.unpaired_ids == ["a", "d"]
    assert round_.matches[0].match_number == 5


def test_unbalanced_pairing_takes_first_valid_candidate():
    players = [
        _swiss_player("a", 1500, 1, ["b"]),
        _swiss_player("b", 1450, 1, ["a"]),
        _swiss_player("c", 1400, 1),
        _swiss_player("d", 1350, 1),
    ]
    round_ = pair_score_groups(players, SwissConfig(prefer_balanced=False), 2, 1)

    assert [m.pair for m in round_.matches] == [("a", "c"), ("b", "d")]


def test_group_by_points_orders_groups():
    players = [
        _swiss_player("a", 1500, 0),
        _swiss_player("b", 1400, 2),
        _swiss_player("c", 1300, 1),
        _swiss_player("d", 1200, 2),
    ]
    groups = group_by_points(players)

    assert [[p.id for p in g] for g in groups] == [["b", "d"], ["c"], ["a"]]


def test_final_ranking_order():
    state = SwissState(
        tournament_id="t",
        total_rounds=3,
        current_round=3,
        participants=[
            _swiss_player("low", 1200, 2),
            _swiss_player("tie_low_bh", 1900, 2),
            _swiss_player("tie_high_bh", 1100, 2),
            _swiss_player("top", 1000, 3),
        ],
    )
    state.participants[1].buchholz = 3.0
    state.participants[2].buchholz = 5.0
    state.participants[0].buchholz = 3.0

    ranking = [p.id for p in calculate_final_ranking(state)]
    assert ranking == ["top", "tie_high_bh", "tie_low_bh", "low"]

    state.config = SwissConfig(use_buchholz=False)
    ranking = [p.id for p in calculate_final_ranking(state)]
    assert ranking == ["top", "tie_low_bh", "low", "tie_high_bh"]


def test_fairness_and_statistics_after_round_one(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))

    # every round-one gap is 400
    assert state.fairness_score == pytest.approx(20.0)
    assert state.statistics.average_rating_variance == 400
    assert state.statistics.balance_score == 60
    assert state.statistics.rematch_count == 0


def test_replay_rebuilds_state(make_participants, descending_ratings):
    participants = make_participants(descending_ratings)
    config = SwissConfig(max_rating_variance=500)
    state = create_swiss_state(participants, config, tournament_id="swiss_replay")
    state = apply_results(state, 1, _higher_rated_wins(state.get_round(1)))
    state, second = generate_next_round(state)
    state = apply_results(state, 2, _higher_rated_wins(second))

    replayed = replay_swiss_state(participants, state.rounds, config, "swiss_replay")

    assert replayed.to_dict() == state.to_dict()


def test_state_round_trips_through_dict(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))
    state = apply_results(state, 1, _higher_rated_wins(state.get_round(1)))

    restored = SwissState.from_dict(state.to_dict())

    assert restored.to_dict() == state.to_dict()
    assert restored.participants_by_id["p1"].points == 1.0


def test_swiss_needs_four_participants(make_participants):
    with pytest.raises(InsufficientParticipantsException):
        create_swiss_state(make_participants([1500, 1400, 1300]))


def test_negative_variance_is_rejected(make_participants, descending_ratings):
    with pytest.raises(InvalidConfigurationException):
        create_swiss_state(
            make_participants(descending_ratings),
            SwissConfig(max_rating_variance=-1),
        )


def test_generated_tournament_id(make_participants, descending_ratings):
    state = create_swiss_state(make_participants(descending_ratings))

    assert state.tournament_id.startswith("swiss_")
