"""Consensus metrics: how much voters agree on a candidate."""

from collections import Counter
from collections.abc import Sequence

from feastvote.models import (
    DEFAULT_WEIGHTS,
    Candidate,
    ConsensusMetrics,
    RecommendationWeights,
    Vote,
)

DEFAULT_CONSENSUS_THRESHOLD = 60.0


def consensus_metrics(candidate: Candidate, votes: Sequence[Vote]) -> ConsensusMetrics:
    """Compute agreement statistics for one candidate.

    Only votes on ``candidate`` are considered. With no such votes every
    number is zero and the candidate is not vetoed.

    consensus_level is the share of votes in the single most common category,
    whether that category is positive or negative. positive_percentage is the
    share of like and super_like votes.
    """
    relevant = [v for v in votes if v.candidate_id == candidate.id]
    if not relevant:
        return ConsensusMetrics(
            total_votes=0,
            score=0,
            consensus_level=0.0,
            positive_percentage=0.0,
            has_veto=False,
            vote_counts={},
        )

    total = len(relevant)
    counts = Counter(v.category for v in relevant)
    score = sum(v.category.score for v in relevant if not v.category.is_veto)
    positive = sum(n for category, n in counts.items() if category.is_positive)

    return ConsensusMetrics(
        total_votes=total,
        score=score,
        consensus_level=max(counts.values()) / total * 100.0,
        positive_percentage=positive / total * 100.0,
        has_veto=any(category.is_veto for category in counts),
        vote_counts=dict(counts),
    )


def recommendation_strength(
    metrics: ConsensusMetrics, weights: RecommendationWeights = DEFAULT_WEIGHTS
) -> float:
    """Combined 0-100 recommendation strength; 0 for a vetoed candidate."""
    return metrics.weighted_strength(weights)


def filter_by_minimum_consensus(
    candidates: Sequence[Candidate],
    votes: Sequence[Vote],
    threshold: float = DEFAULT_CONSENSUS_THRESHOLD,
) -> list[Candidate]:
    """Keep non-vetoed candidates whose consensus level reaches ``threshold``."""
    kept = []
    for candidate in candidates:
        metrics = consensus_metrics(candidate, votes)
        if not metrics.has_veto and metrics.consensus_level >= threshold:
            kept.append(candidate)
    return kept
