"""Structure generators and pairing strategies."""

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

from bracketforge.pairing.hybrid import assign_groups, generate_hybrid
from bracketforge.pairing.labels import RoundLabel, round_label
from bracketforge.pairing.round_robin import generate_round_robin, round_robin_matches
from bracketforge.pairing.seeding import (
    bracket_size,
    round_count,
    seed_participants,
    seed_teams,
    sequential_pairs,
    standard_bracket_pairs,
)
from bracketforge.pairing.single_elimination import generate_single_elimination
from bracketforge.pairing.swiss import (
    calculate_rounds,
    pair_first_round,
    pair_score_groups,
)

__all__ = [
    "RoundLabel",
    "assign_groups",
    "bracket_size",
    "calculate_rounds",
    "generate_hybrid",
    "generate_round_robin",
    "generate_single_elimination",
    "pair_first_round",
    "pair_score_groups",
    "round_count",
    "round_label",
    "round_robin_matches",
    "seed_participants",
    "seed_teams",
    "sequential_pairs",
    "standard_bracket_pairs",
]
