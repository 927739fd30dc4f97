"""Shared test helpers."""

from feastvote.models import Candidate, Vote, VoteCategory


def make_candidates(*ids: str, **costs: int) -> list[Candidate]:
    """Build bare candidates, optionally with costs given as id=cents."""
    return [Candidate(id=cid, title=cid, cost=costs.get(cid)) for cid in ids]


def make_votes(ballots: dict[str, dict[str, str]]) -> list[Vote]:
    """Build votes from a compact ballot table.

    Args:
        ballots: {voter_id: {candidate_id: category_name}}

    Returns:
        Votes in table order.
    """
    return [
        Vote(voter_id=voter, candidate_id=cid, category=VoteCategory(category))
        for voter, ballot in ballots.items()
        for cid, category in ballot.items()
    ]


def ids(candidates) -> list:
    return [c.id for c in candidates]


def ranking_ids(result) -> list:
    """Extract candidate ids from a VotingResult's final_ranking."""
    return [p.candidate_id for p in result.final_ranking]
