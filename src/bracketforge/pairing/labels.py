"""Knockout round labels."""

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

from typing import NamedTuple

from bracketforge.constants import KNOCKOUT_ROUND_NAMES, KNOCKOUT_STAGE_KEYS


class RoundLabel(NamedTuple):
    name: str
    stage: str


def round_label(remaining_players: int, round_number: int) -> RoundLabel:
    """Label a knockout round from the number of players still in it.

    ``remaining_players`` counts bracket slots entering the round (a power
    of two), so 2 is the final, 4 the semi finals and so on.
    ``round_number`` is the round's position within the knockout and is
    only used for the generic "Round k" name.

    >>> round_label(2, 3)
    RoundLabel(name='Final', stage='finals')
    >>> round_label(16, 1)
    RoundLabel(name='Round 1', stage='round_of_16')
    """
    name = KNOCKOUT_ROUND_NAMES.get(remaining_players, f"Round {round_number}")
    stage = KNOCKOUT_STAGE_KEYS.get(
        remaining_players, f"elimination_round_{remaining_players}"
    )
    return RoundLabel(name=name, stage=stage)
