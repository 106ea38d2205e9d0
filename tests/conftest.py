import pytest

from bracketforge.models import Participant
from bracketforge.pairing import seed_participants


def _make_participants(ratings, prefix="p"):
    return [
        Participant(id=f"{prefix}{i + 1}", name=f"Player {i + 1}", rating=rating)
        for i, rating in enumerate(ratings)
    ]


@pytest.fixture
def make_participants():
    """Factory: ratings -> participants with ids p1, p2, ... in input order."""
    return _make_participants


@pytest.fixture
def make_seeded():
    """Factory: ratings -> seeded participants."""

    def factory(ratings):
        return seed_participants(_make_participants(ratings))

    return factory


@pytest.fixture
def descending_ratings():
    """Eight ratings from 2000 down to 1300 in steps of 100."""
    return [2000 - 100 * i for i in range(8)]
