"""Constrained selection: pick the meals to plan from a vote set.

smart_select runs a fixed pipeline:

1. Score all candidates (modified Borda count).
2. Drop vetoed candidates.
3. Drop candidates with a negative score.
4. With a budget: greedily accept candidates in score order while the running
   cost stays within the limit, skipping (not stopping at) candidates that
   would overshoot. This is score-first, not cost-optimal: a cheaper
   combination of lower-scored candidates may exist and is not searched for.
5. With prefer_variety: walk the candidates in score order tracking the
   cuisines and difficulties seen so far. The variety bonus (+10 for an unseen
   cuisine, +5 for an unseen difficulty) is computed and logged but does not
   change the order. Pass variety_weighted=True to let the bonus pick the
   order instead.
6. Truncate to the requested count.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from feastvote.models import BudgetStatus, Candidate, ScoredCandidate, Vote
from feastvote.voting.scoring import eligible, score_candidates

logger = logging.getLogger(__name__)

CUISINE_BONUS = 10
DIFFICULTY_BONUS = 5
UNKNOWN_CUISINE = "unknown"
NEAR_LIMIT_RATIO = 0.9


def smart_select(
    candidates: Sequence[Candidate],
    votes: Sequence[Vote],
    count: int,
    budget_limit: int | None = None,
    prefer_variety: bool = True,
    variety_weighted: bool = False,
) -> list[Candidate]:
    """Select up to ``count`` candidates honouring vetoes, scores and budget.

    Args:
        candidates: Candidate recipes
        votes: All votes cast
        count: Number of candidates wanted; ``<= 0`` gives an empty list
        budget_limit: Maximum summed cost in cents, or None for no limit
        prefer_variety: Run the variety pass (order-preserving by default)
        variety_weighted: Let the variety bonus reorder the selection

    Returns:
        The selected candidates, best first. Never raises for empty input.
    """
    if count <= 0:
        return []

    scored = eligible(score_candidates(candidates, votes))

    if budget_limit is not None:
        scored = _fit_budget(scored, budget_limit, count)

    if prefer_variety:
        scored = _maximize_variety(scored, count, weighted=variety_weighted)

    return [s.candidate for s in scored[:count]]


def candidate_cost(candidate: Candidate) -> int:
    return candidate.cost or 0


def _fit_budget(
    scored: Sequence[ScoredCandidate], budget: int, count: int
) -> list[ScoredCandidate]:
    ordered = sorted(scored, key=lambda s: s.score, reverse=True)

    selected: list[ScoredCandidate] = []
    total_cost = 0
    for item in ordered:
        cost = candidate_cost(item.candidate)
        if total_cost + cost > budget:
            logger.debug(
                "skipping %s: cost %d would exceed budget (%d of %d used)",
                item.candidate.id, cost, total_cost, budget,
            )
            continue
        selected.append(item)
        total_cost += cost
        if len(selected) >= count:
            break

    return selected


def variety_bonus(
    candidate: Candidate, cuisines_seen: Counter, difficulties_seen: Counter
) -> int:
    """Bonus for a candidate adding a cuisine or difficulty not picked yet."""
    bonus = 0
    if cuisines_seen[candidate.cuisine or UNKNOWN_CUISINE] == 0:
        bonus += CUISINE_BONUS
    if difficulties_seen[candidate.difficulty] == 0:
        bonus += DIFFICULTY_BONUS
    return bonus


def _maximize_variety(
    scored: Sequence[ScoredCandidate], count: int, weighted: bool = False
) -> list[ScoredCandidate]:
    pool = sorted(scored, key=lambda s: s.score, reverse=True)
    selected: list[ScoredCandidate] = []
    cuisines_seen: Counter = Counter()
    difficulties_seen: Counter = Counter()

    while pool and len(selected) < count:
        if weighted:
            # Highest score + bonus; max() keeps the earliest on ties
            pick = max(
                range(len(pool)),
                key=lambda i: pool[i].score
                + variety_bonus(pool[i].candidate, cuisines_seen, difficulties_seen),
            )
        else:
            pick = 0
        item = pool.pop(pick)
        bonus = variety_bonus(item.candidate, cuisines_seen, difficulties_seen)
        logger.debug("variety: %s score %d bonus %d", item.candidate.id, item.score, bonus)

        selected.append(item)
        cuisines_seen[item.candidate.cuisine or UNKNOWN_CUISINE] += 1
        difficulties_seen[item.candidate.difficulty] += 1

    return selected


def total_cost(selected: Iterable[Candidate]) -> int:
    return sum(candidate_cost(c) for c in selected)


def budget_status(
    selected: Iterable[Candidate], budget_limit: int | None
) -> tuple[BudgetStatus, int]:
    """Compare the summed cost of ``selected`` against ``budget_limit``.

    Returns the status and the overage in cents (0 unless over budget).
    Spending more than 90% of the limit counts as near the limit.
    """
    if budget_limit is None:
        return BudgetStatus.NO_BUDGET, 0
    estimated = total_cost(selected)
    if estimated > budget_limit:
        return BudgetStatus.OVER_BUDGET, estimated - budget_limit
    if estimated > budget_limit * NEAR_LIMIT_RATIO:
        return BudgetStatus.NEAR_LIMIT, 0
    return BudgetStatus.UNDER_BUDGET, 0


def remaining_budget(selected: Iterable[Candidate], budget_limit: int | None) -> int | None:
    """Cents left under ``budget_limit``; negative when over, None without a budget."""
    if budget_limit is None:
        return None
    return budget_limit - total_cost(selected)
