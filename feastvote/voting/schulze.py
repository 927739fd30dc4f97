"""Schulze method voting system."""

import logging
from collections.abc import Sequence

from feastvote.models import Candidate, Placement, Vote, VotingResult
from feastvote.voting import register_voting_system
from feastvote.voting.base import VotingSystem, group_ties
from feastvote.voting.pairwise import build_pairwise_matrix
from feastvote.voting.scoring import score_candidates

logger = logging.getLogger(__name__)


def compute_strongest_paths(pairwise: list[list[int]]) -> list[list[int]]:
    """Calculate strongest path strengths with a Floyd-Warshall variant.

    ``paths[i][j]`` is the strength of the strongest path from i to j, where a
    path is as strong as its weakest link. Starts from a copy of the pairwise
    matrix; the input is not modified.

    Complexity: O(n³). Fine for the 15-20 candidates of a voting round,
    noticeably slow beyond about 50.
    """
    n = len(pairwise)
    paths = [list(row) for row in pairwise]

    for k in range(n):
        for i in range(n):
            if i == k:
                continue
            for j in range(n):
                if j == i or j == k:
                    continue
                # Strength of path through k is min of the two links
                strength_via_k = min(paths[i][k], paths[k][j])
                paths[i][j] = max(paths[i][j], strength_via_k)

    return paths


def schulze_wins(paths: list[list[int]]) -> list[int]:
    """Count, for each candidate, the others it beats (p[i][j] > p[j][i])."""
    n = len(paths)
    wins = [0] * n
    for i in range(n):
        for j in range(n):
            if i != j and paths[i][j] > paths[j][i]:
                wins[i] += 1
    return wins


def schulze_rank(
    candidates: Sequence[Candidate], votes: Sequence[Vote]
) -> list[Candidate]:
    """Rank candidates by Schulze wins, most wins first.

    Equal win counts keep their order in ``candidates``. Vetoes get no special
    treatment here; filter vetoed candidates out beforehand if they must not
    appear.
    """
    if not candidates:
        return []

    paths = compute_strongest_paths(build_pairwise_matrix(candidates, votes))
    wins = schulze_wins(paths)
    order = sorted(range(len(candidates)), key=lambda i: wins[i], reverse=True)
    return [candidates[i] for i in order]


@register_voting_system
class SchulzeSystem(VotingSystem):
    """Schulze method voting system.

    A Condorcet method that uses "beatpath" strengths to determine rankings.
    It handles cyclic preferences gracefully by finding the strongest path
    between each pair of candidates.

    Algorithm:
    1. Build pairwise preference matrix: d[A][B] = voters preferring A over B
    2. Calculate strongest path strengths using Floyd-Warshall variant
    3. A beats B (in Schulze sense) if path strength A→B > path strength B→A
    4. Rank by number of Schulze wins

    Vetoed candidates are removed before ranking.

    Complexity: O(n³) where n is the number of candidates.
    """

    @property
    def name(self) -> str:
        return "Schulze Method"

    @property
    def description(self) -> str:
        return "Condorcet method using beatpath strengths to handle cyclic preferences"

    def calculate(
        self, candidates: Sequence[Candidate], votes: Sequence[Vote]
    ) -> VotingResult:
        vetoed = {s.candidate.id for s in score_candidates(candidates, votes) if s.has_veto}
        remaining = [c for c in candidates if c.id not in vetoed]
        ids = [c.id for c in remaining]
        n = len(remaining)

        d = build_pairwise_matrix(remaining, votes)
        p = compute_strongest_paths(d)
        wins = schulze_wins(p)
        logger.debug("schulze wins: %s", dict(zip(ids, wins)))

        win_counts = {ids[i]: wins[i] for i in range(n)}
        ranked = sorted(ids, key=lambda c: win_counts[c], reverse=True)
        ordered = group_ties(ranked, win_counts)

        # Build readable matrices for details
        pairwise_matrix = {
            ids[i]: {ids[j]: d[i][j] for j in range(n)}
            for i in range(n)
        }
        path_strengths = {
            ids[i]: {ids[j]: p[i][j] for j in range(n)}
            for i in range(n)
        }

        return VotingResult(
            system_name=self.name,
            final_ranking=Placement.build_ranking(ordered),
            details={
                "pairwise_preferences": pairwise_matrix,
                "path_strengths": path_strengths,
                "schulze_wins": win_counts,
                "vetoed": [c.id for c in candidates if c.id in vetoed],
                "ties": [entry for entry in ordered if isinstance(entry, list)],
                "explanation": (
                    "Each cell d[A][B] shows voters preferring A over B. "
                    "Path strengths use Floyd-Warshall to find strongest "
                    "indirect paths. A beats B if path A→B > path B→A."
                ),
            },
        )
