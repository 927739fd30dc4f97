"""Pairwise preference matrix built from category votes."""

import math
from collections.abc import Hashable, Sequence

from feastvote.models import Candidate, Vote, VoteCategory


def preference_level(category: VoteCategory) -> float:
    """Comparable preference level of a category for one voter.

    Scored categories compare by their score. A veto sits below every scored
    category. Levels are only ever compared, never summed.
    """
    if category.is_veto:
        return -math.inf
    return category.score


def _voter_levels(votes: Sequence[Vote]) -> dict[Hashable, dict[Hashable, float]]:
    """Map voter -> candidate -> preference level, keeping each voter's first vote."""
    levels: dict[Hashable, dict[Hashable, float]] = {}
    for vote in votes:
        ballot = levels.setdefault(vote.voter_id, {})
        ballot.setdefault(vote.candidate_id, preference_level(vote.category))
    return levels


def build_pairwise_matrix(
    candidates: Sequence[Candidate], votes: Sequence[Vote]
) -> list[list[int]]:
    """Count, for every ordered candidate pair, the voters preferring the first.

    ``matrix[i][j]`` is the number of distinct voters whose preference for
    ``candidates[i]`` is strictly higher than for ``candidates[j]``. A
    candidate the voter did not vote on counts as "ok" (level 0).

    Runs in O(V * N^2) for V voters and N candidates.
    """
    n = len(candidates)
    matrix = [[0] * n for _ in range(n)]

    for ballot in _voter_levels(votes).values():
        row = [ballot.get(c.id, 0) for c in candidates]
        for i in range(n):
            for j in range(n):
                if i != j and row[i] > row[j]:
                    matrix[i][j] += 1

    return matrix
