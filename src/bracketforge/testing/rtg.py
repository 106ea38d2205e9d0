"""Random Tournament Generator (RTG) - simulation harness for the Swiss engine.

This module generates reproducible participant pools and match results,
plays complete Swiss tournaments with them and summarizes the pairing
quality over many runs.
"""

# Bracket Forge
# Copyright (C) 2025  Bracket Forge developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from bracketforge.exceptions import BracketForgeException
from bracketforge.models.config import SwissConfig
from bracketforge.models.match import Match, MatchResult
from bracketforge.models.participant import Participant
from bracketforge.models.swiss import SwissState
from bracketforge.tournament.swiss_tournament import (
    apply_results,
    create_swiss_state,
    generate_next_round,
)
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


class RatingDistribution(Enum):
    """Rating distribution patterns for generated pools."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    SKEWED = "skewed"
    CLUB = "club"


class ResultPattern(Enum):
    """Result generation patterns for simulated matches."""

    REALISTIC = "realistic"
    BALANCED = "balanced"
    PREDICTABLE = "predictable"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    rating_distribution: RatingDistribution = RatingDistribution.NORMAL
    rating_range: Tuple[int, int] = (1000, 2000)
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    draw_percentage: int = 10
    swiss: SwissConfig = field(default_factory=SwissConfig)


class ParticipantFactory:
    """Factory for creating rated participant pools."""

    TIERS = ((1800, "A"), (1500, "B"), (1200, "C"))

    def __init__(self, config: RTGConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.random = rng or (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_participants(self) -> List[Participant]:
        """Create participants based on configuration."""
        participants = []
        for i in range(self.config.num_players):
            rating = self._generate_rating()
            participants.append(
                Participant(
                    id=f"p{i + 1:03d}",
                    name=f"Player-{i + 1:03d}",
                    rating=rating,
                    tier=self._tier_for(rating),
                )
            )

        logger.info(
            f"Created {len(participants)} participants with "
            f"{self.config.rating_distribution.value} distribution"
        )
        return participants

    def _generate_rating(self) -> int:
        min_rating, max_rating = self.config.rating_range
        distribution = self.config.rating_distribution
        if distribution == RatingDistribution.UNIFORM:
            return self.random.randint(min_rating, max_rating)
        if distribution == RatingDistribution.NORMAL:
            mean = (min_rating + max_rating) / 2
            std_dev = (max_rating - min_rating) / 6
            rating = int(self.random.gauss(mean, std_dev))
            return max(min_rating, min(max_rating, rating))
        if distribution == RatingDistribution.SKEWED:
            middle = (min_rating + max_rating) // 2
            if self.random.random() < 0.7:
                return self.random.randint(min_rating, middle)
            return self.random.randint(middle, max_rating)
        base = self.random.choice(range(min_rating, max_rating + 1, 200))
        return max(min_rating, min(max_rating, self.random.randint(base - 100, base + 100)))

    def _tier_for(self, rating: int) -> str:
        for floor, tier in self.TIERS:
            if rating >= floor:
                return tier
        return "D"


class ResultSimulator:
    """Simulates match results from the two participants' ratings."""

    def __init__(self, config: RTGConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.random = rng or (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate(self, match: Match) -> MatchResult:
        """Return a result for a fully paired match."""
        pattern = self.config.result_pattern
        if pattern == ResultPattern.RANDOM:
            score = self.random.choice([1.0, 0.5, 0.0])
        elif pattern == ResultPattern.BALANCED:
            score = self._weighted_result(match, divisor=1000, draw_prob=0.1)
        elif pattern == ResultPattern.PREDICTABLE:
            score = self._weighted_result(match, divisor=200, draw_prob=0.05)
        else:
            score = self._realistic_result(match)

        if score == 0.5:
            return MatchResult(match.player1_id, match.player2_id, is_draw=True)
        winner = match.player1_id if score == 1.0 else match.player2_id
        return MatchResult(match.player1_id, match.player2_id, winner_id=winner)

    def _realistic_result(self, match: Match) -> float:
        diff = match.player1_rating - match.player2_rating
        expected = math.erfc(-diff * (7.0 / math.sqrt(2.0) / 2000.0)) / 2.0
        draw_prob = min(
            self.config.draw_percentage / 100.0, 2.0 - 2.0 * max(expected, 1 - expected)
        )
        value = self.random.random()
        if value < draw_prob:
            return 0.5
        return 1.0 if value < expected + draw_prob / 2.0 else 0.0

    def _weighted_result(self, match: Match, divisor: float, draw_prob: float) -> float:
        diff = match.player1_rating - match.player2_rating
        win_prob = max(0.05, min(0.95, 0.5 + diff / divisor))
        total = win_prob + draw_prob
        win_prob /= total
        draw_prob /= total
        rand = self.random.random()
        if rand < win_prob:
            return 1.0
        if rand < win_prob + draw_prob:
            return 0.5
        return 0.0


class RandomTournamentGenerator:
    """Plays complete Swiss tournaments on generated pools."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.participant_factory = ParticipantFactory(config, self.random)
        self.result_simulator = ResultSimulator(config, self.random)

    def generate_complete_tournament(self, tournament_id: Optional[str] = None) -> SwissState:
        """Create a pool, then pair and play every round.

        Returns:
            The final state after the last round
        """
        participants = self.participant_factory.create_participants()
        state = create_swiss_state(participants, self.config.swiss, tournament_id)
        state = self._play_round(state, 1)
        while state.current_round < state.total_rounds:
            state, round_ = generate_next_round(state)
            state = self._play_round(state, round_.round_number)
        return state

    def _play_round(self, state: SwissState, round_number: int) -> SwissState:
        round_ = state.get_round(round_number)
        results = [self.result_simulator.simulate(m) for m in round_.matches]
        if not results:
            return state
        return apply_results(state, round_number, results)


def run_swiss_simulation(
    num_players: int,
    runs: int = 10,
    seed: Optional[int] = None,
    swiss_config: Optional[SwissConfig] = None,
    result_pattern: ResultPattern = ResultPattern.REALISTIC,
) -> Dict[str, Any]:
    """Play ``runs`` Swiss tournaments and average their quality figures.

    Failed runs are logged and skipped.

    Returns:
        ``{"simulation_count", "results", "averages"}`` where each result
        holds the run number, fairness score and statistics

    Raises:
        BracketForgeException: If every run failed
    """
    master = random.Random(seed)
    results: List[Dict[str, Any]] = []
    for run in range(1, runs + 1):
        config = RTGConfig(
            num_players=num_players,
            seed=master.randrange(2**32),
            result_pattern=result_pattern,
            swiss=swiss_config or SwissConfig(),
        )
        try:
            state = RandomTournamentGenerator(config).generate_complete_tournament(
                tournament_id=f"simulation_{run}"
            )
        except BracketForgeException as e:
            logger.error(f"Simulation {run} failed: {e}")
            continue
        results.append(
            {
                "simulation": run,
                "fairness_score": state.fairness_score,
                "statistics": state.statistics.to_dict(),
            }
        )

    if not results:
        raise BracketForgeException(f"All {runs} simulations failed")

    count = len(results)

    def mean(values):
        return sum(values) / count

    averages = {
        "fairness_score": round(mean(r["fairness_score"] for r in results), 2),
        "average_rating_variance": round(
            mean(r["statistics"]["average_rating_variance"] for r in results)
        ),
        "balance_score": round(mean(r["statistics"]["balance_score"] for r in results)),
        "rematch_count": round(
            mean(r["statistics"]["rematch_count"] for r in results), 2
        ),
    }
    logger.info(f"Simulated {count}/{runs} Swiss tournaments: {averages}")
    return {"simulation_count": count, "results": results, "averages": averages}
