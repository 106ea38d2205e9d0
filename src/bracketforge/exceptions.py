"""Exceptions for use in Bracket Forge"""

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


# ========== Base Application Exception ==========


class BracketForgeException(Exception):
    """Base exception for all Bracket Forge errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all engine errors with a single except clause.
    """

    pass


# ========== Input Exceptions ==========


class InputException(BracketForgeException, ValueError):
    """Base exception for invalid input handed to a generator."""

    pass


class InsufficientParticipantsException(InputException):
    """Raised when a format's minimum participant count is not met."""

    def __init__(self, required: int, actual: int, format_name: str = "") -> None:
        self.required = required
        self.actual = actual
        self.format_name = format_name
        label = f" for {format_name}" if format_name else ""
        super().__init__(
            f"At least {required} participants are required{label}, got {actual}"
        )


class InvalidParticipantDataException(InputException):
    """Raised when participant data is invalid or incomplete."""

    pass


class InvalidResultException(InputException):
    """Raised when a submitted result is malformed (e.g. unknown winner)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(BracketForgeException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException, ValueError):
    """Raised when generation parameters are invalid."""

    pass


# ========== State Exceptions ==========


class StateException(BracketForgeException):
    """Raised when an operation is requested out of sequence."""

    pass


class AllRoundsCompleteException(StateException):
    """Raised when a round is requested past the tournament's total rounds."""

    pass


class RoundNotFoundException(StateException):
    """Raised when a requested round does not exist."""

    pass


class RoundNotCompletedException(StateException):
    """Raised when the next round is requested before results are in."""

    pass


class DuplicateResultException(StateException):
    """Raised when attempting to record a result that already exists."""

    pass


# ========== Lookup Exceptions ==========


class MatchNotFoundException(BracketForgeException, LookupError):
    """Raised when a result names a pairing that is not in the round."""

    def __init__(self, round_number: int, player1_id: str, player2_id: str) -> None:
        self.round_number = round_number
        self.player1_id = player1_id
        self.player2_id = player2_id
        super().__init__(
            f"No match {player1_id} vs {player2_id} in round {round_number}"
        )
