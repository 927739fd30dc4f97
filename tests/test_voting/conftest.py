"""Shared fixtures for voting system tests."""

import pytest
from tests.conftest import make_candidates, make_votes


@pytest.fixture
def recipes():
    return make_candidates("A", "B", "C")


@pytest.fixture
def clear_preference():
    """Three voters all preferring A > B > C.

            V1          V2      V3
    A       super_like  like    like
    B       like        like    ok
    C       ok          ok      dislike
    """
    return make_votes({
        "V1": {"A": "super_like", "B": "like", "C": "ok"},
        "V2": {"A": "like", "B": "like", "C": "ok"},
        "V3": {"A": "like", "B": "ok", "C": "dislike"},
    })


@pytest.fixture
def mixed_votes():
    """Four voters, one candidate, every category but veto once."""
    return make_votes({
        "V1": {"A": "super_like"},
        "V2": {"A": "like"},
        "V3": {"A": "ok"},
        "V4": {"A": "dislike"},
    })


@pytest.fixture
def perfect_cycle():
    """Perfect cycle, 3 voters, 3 candidates.

            V1          V2          V3
    A       super_like  ok          like
    B       like        super_like  ok
    C       ok          like        super_like

    Every pairwise contest is 2-1, so no candidate beats another.
    """
    return make_votes({
        "V1": {"A": "super_like", "B": "like", "C": "ok"},
        "V2": {"A": "ok", "B": "super_like", "C": "like"},
        "V3": {"A": "like", "B": "ok", "C": "super_like"},
    })
