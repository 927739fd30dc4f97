"""Modified Borda count: per-category points with a hard veto."""

import logging
from collections.abc import Sequence

from feastvote.models import Candidate, Placement, ScoredCandidate, Vote, VotingResult
from feastvote.voting import register_voting_system
from feastvote.voting.base import VotingSystem, group_ties

logger = logging.getLogger(__name__)


def score_candidates(
    candidates: Sequence[Candidate], votes: Sequence[Vote]
) -> list[ScoredCandidate]:
    """Score every candidate and flag the vetoed ones.

    A candidate's score is the sum of the category scores of all votes on it.
    Veto votes add nothing to the score; they set ``has_veto`` instead. Votes
    on ids that are not in ``candidates`` are ignored.

    The result lists non-vetoed candidates first, then orders by score
    descending. Equal scores keep their order in ``candidates``.
    """
    totals: dict = {c.id: 0 for c in candidates}
    vetoed: set = set()

    for vote in votes:
        if vote.candidate_id not in totals:
            continue
        if vote.category.is_veto:
            vetoed.add(vote.candidate_id)
        else:
            totals[vote.candidate_id] += vote.category.score

    scored = [
        ScoredCandidate(candidate=c, score=totals[c.id], has_veto=c.id in vetoed)
        for c in candidates
    ]
    scored.sort(key=lambda s: (s.has_veto, -s.score))
    return scored


def eligible(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Drop vetoed candidates and those with a negative score."""
    kept = [s for s in scored if not s.has_veto and s.score >= 0]
    if len(kept) < len(scored):
        logger.debug(
            "dropped %d vetoed or negative candidates: %s",
            len(scored) - len(kept),
            [s.candidate.id for s in scored if s.has_veto or s.score < 0],
        )
    return kept


def select_top(
    candidates: Sequence[Candidate], votes: Sequence[Vote], count: int
) -> list[Candidate]:
    """Return up to ``count`` best-scoring candidates, excluding vetoed and negative ones."""
    if count <= 0:
        return []
    survivors = eligible(score_candidates(candidates, votes))
    return [s.candidate for s in survivors[:count]]


@register_voting_system
class ScoreVotingSystem(VotingSystem):
    """Modified Borda count voting system.

    Each vote awards fixed points to the candidate it is cast on:
    - super_like = +2
    - like = +1
    - ok = 0
    - dislike = -100 (soft veto)
    - veto = disqualified regardless of other votes (hard veto)

    Points are summed across all voters. Vetoed candidates are left out of the
    ranking and listed in the details. Candidates with equal scores tie.
    """

    @property
    def name(self) -> str:
        return "Modified Borda Count"

    @property
    def description(self) -> str:
        return "Points per vote: super like +2, like +1, ok 0, dislike -100; any veto disqualifies"

    def calculate(
        self, candidates: Sequence[Candidate], votes: Sequence[Vote]
    ) -> VotingResult:
        scored = score_candidates(candidates, votes)
        ranked = [s for s in scored if not s.has_veto]

        scores = {s.candidate.id: s.score for s in scored}
        ordered = group_ties([s.candidate.id for s in ranked], scores)
        ties = [entry for entry in ordered if isinstance(entry, list)]

        return VotingResult(
            system_name=self.name,
            final_ranking=Placement.build_ranking(ordered),
            details={
                "scores": scores,
                "vetoed": [s.candidate.id for s in scored if s.has_veto],
                "negative": [s.candidate.id for s in ranked if s.score < 0],
                "ties": ties,
            },
        )
