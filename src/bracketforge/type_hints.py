"""Type hints used in Bracket Forge."""

from typing import Callable, List, Literal, Optional, Sequence, Tuple, TypeVar

# Tournament format literals
TournamentFormat = Literal["single_elimination", "round_robin", "hybrid", "swiss"]
BracketFormat = Literal["single_elimination", "round_robin", "hybrid"]

# Singles or paired teams
EventType = Literal["singles", "doubles"]

# Outcome of a match from one participant's point of view
Outcome = Literal["win", "draw", "loss"]

# Knockout slot position
Position = Literal["upper", "lower"]

T = TypeVar("T")

# One knockout slot pair, None is an empty slot
SlotPair = Tuple[Optional[T], Optional[T]]
# Turns a seed-ordered list into round-one slot pairs
PairingStrategy = Callable[[Sequence[T]], List[SlotPair]]
#  LocalWords:  PairingStrategy SlotPair
