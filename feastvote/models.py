"""Core data models for votes, candidates and voting results."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Self


class VoteCategory(Enum):
    """The closed set of vote categories a member can cast on a candidate.

    Values are the serialized names. Every category except ``VETO`` carries an
    integer score; ``VETO`` is a disqualification flag and has no score.
    """
    SUPER_LIKE = "super_like"
    LIKE = "like"
    OK = "ok"
    DISLIKE = "dislike"
    VETO = "veto"

    @property
    def score(self) -> int | None:
        """Points this category adds to a candidate's score, None for a veto."""
        return _CATEGORY_SCORES[self]

    @property
    def is_veto(self) -> bool:
        return self is VoteCategory.VETO

    @property
    def is_positive(self) -> bool:
        return self in (VoteCategory.LIKE, VoteCategory.SUPER_LIKE)

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, name: str) -> Self:
        """Look up a category by its serialized name.

        Also accepts the camelCase ``superLike`` written by the mobile app.

        Raises:
            ValueError: If the name is not a known category
        """
        normalized = name.strip()
        if normalized == "superLike":
            return cls.SUPER_LIKE
        try:
            return cls(normalized.lower())
        except ValueError:
            raise ValueError(f"Unknown vote category: {name!r}") from None


_CATEGORY_SCORES: dict[VoteCategory, int | None] = {
    VoteCategory.SUPER_LIKE: 2,
    VoteCategory.LIKE: 1,
    VoteCategory.OK: 0,
    VoteCategory.DISLIKE: -100,  # soft veto: outweighs any realistic sum of likes
    VoteCategory.VETO: None,
}

_CATEGORY_LABELS: dict[VoteCategory, str] = {
    VoteCategory.SUPER_LIKE: "Love It!",
    VoteCategory.LIKE: "Like",
    VoteCategory.OK: "It's OK",
    VoteCategory.DISLIKE: "Dislike",
    VoteCategory.VETO: "Never",
}


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Candidate:
    """An item being voted on (a recipe).

    Attributes:
        id: Stable, opaque identifier
        title: Display name, informational only
        cost: Estimated total cost in cents, or None if unknown
        cuisine: Cuisine tag (e.g. "Italian"), or None if unknown
        difficulty: Preparation difficulty
    """
    id: Hashable
    title: str = ""
    cost: int | None = None
    cuisine: str | None = None
    difficulty: Difficulty = Difficulty.MEDIUM

    @classmethod
    def from_serving_cost(
        cls, id: Hashable, cost_per_serving: int | None, servings: int, **kwargs: Any
    ) -> Self:
        """Build a candidate whose total cost is per-serving cost times servings."""
        cost = None if cost_per_serving is None else cost_per_serving * servings
        return cls(id=id, cost=cost, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "cost": self.cost,
            "cuisine": self.cuisine,
            "difficulty": self.difficulty.value,
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Vote:
    """A single member's vote on a single candidate.

    At most one vote per (voter, candidate) pair is expected. Duplicates are
    not removed: scoring sums all of them.
    """
    voter_id: Hashable
    candidate_id: Hashable
    category: VoteCategory
    comment: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter": self.voter_id,
            "candidate": self.candidate_id,
            "category": self.category.value,
            "comment": self.comment,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its aggregate score and veto flag."""
    candidate: Candidate
    score: int
    has_veto: bool


@dataclass(frozen=True)
class RecommendationWeights:
    """Weights for the combined recommendation strength (0-100).

    The score component is the candidate score clamped to ``[0, score_cap]``
    and scaled to 0-100. The three weights should sum to 1.
    """
    score_weight: float = 0.4
    consensus_weight: float = 0.3
    positive_weight: float = 0.3
    score_cap: int = 20


DEFAULT_WEIGHTS = RecommendationWeights()


@dataclass
class ConsensusMetrics:
    """Agreement statistics for one candidate.

    Attributes:
        total_votes: Number of votes on the candidate
        score: Sum of category scores (vetoes excluded)
        consensus_level: Percentage of votes in the most common category
        positive_percentage: Percentage of like and super_like votes
        has_veto: Whether any vote is a veto
        vote_counts: Number of votes per category
    """
    total_votes: int
    score: int
    consensus_level: float
    positive_percentage: float
    has_veto: bool
    vote_counts: dict[VoteCategory, int] = field(default_factory=dict)

    @property
    def recommendation_strength(self) -> float:
        """Recommendation strength with the default weights."""
        return self.weighted_strength(DEFAULT_WEIGHTS)

    def weighted_strength(self, weights: RecommendationWeights) -> float:
        if self.has_veto:
            return 0.0
        clamped = min(max(self.score, 0), weights.score_cap)
        normalized_score = clamped / weights.score_cap * 100.0
        return (
            normalized_score * weights.score_weight
            + self.consensus_level * weights.consensus_weight
            + self.positive_percentage * weights.positive_weight
        )

    def summary(self) -> str:
        return "\n".join([
            f"Total Votes: {self.total_votes}",
            f"Score: {self.score}",
            f"Consensus Level: {self.consensus_level:.1f}%",
            f"Positive: {self.positive_percentage:.1f}%",
            f"Vetoed: {'yes' if self.has_veto else 'no'}",
        ])

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_votes": self.total_votes,
            "score": self.score,
            "consensus_level": self.consensus_level,
            "positive_percentage": self.positive_percentage,
            "has_veto": self.has_veto,
            "vote_counts": {c.value: n for c, n in self.vote_counts.items()},
            "recommendation_strength": self.recommendation_strength,
        }


@dataclass
class Placement:
    """A candidate's placement in a voting result.

    Attributes:
        candidate_id: Candidate identifier
        rank: 1-indexed placement (tied candidates share the same rank)
        tied: Whether this candidate is tied with others at this rank
    """
    candidate_id: Hashable
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {"candidate": self.candidate_id, "rank": self.rank, "tied": self.tied}

    @classmethod
    def build_ranking(
        cls, ordered: list[Hashable | list[Hashable]]
    ) -> list[Self]:
        """Build a list of Placements from an ordered list.

        Args:
            ordered: Candidate ids in order from 1st to last place.
                Each element is either a single id or a list of ids for
                tied candidates.

        Returns:
            List of Placement objects with correct ranks and tied flags.
        """
        placements = []
        rank = 1
        for entry in ordered:
            if isinstance(entry, list):
                for candidate_id in entry:
                    placements.append(cls(candidate_id=candidate_id, rank=rank, tied=True))
                rank += len(entry)
            else:
                placements.append(cls(candidate_id=entry, rank=rank, tied=False))
                rank += 1

        return placements


@dataclass
class VotingResult:
    """Result from a voting system.

    Attributes:
        system_name: Human-readable name of the voting system
        final_ranking: Candidates in order from 1st to last place
        details: System-specific details for transparency/debugging
                 (e.g., scores, pairwise matrices, tie groups)
    """
    system_name: str
    final_ranking: list[Placement]
    details: dict[str, Any] = field(default_factory=dict)

    def get_place(self, candidate_id: Hashable) -> int | None:
        """Get the 1-indexed placement for a candidate, or None if not ranked."""
        for p in self.final_ranking:
            if p.candidate_id == candidate_id:
                return p.rank
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "system_name": self.system_name,
            "final_ranking": [p.to_dict() for p in self.final_ranking],
            "details": self.details,
        }


class BudgetStatus(Enum):
    NO_BUDGET = "no_budget"
    UNDER_BUDGET = "under_budget"
    NEAR_LIMIT = "near_limit"
    OVER_BUDGET = "over_budget"


@dataclass
class VotingSession:
    """One meal-planning voting round.

    Attributes:
        name: Session name (e.g. "Week of Jan 15")
        candidates: Candidate recipes, in display order
        votes: Votes cast during the session
        meal_count: Number of meals to pick
        budget_limit: Spending limit in cents, or None for no limit
        members: Household member ids expected to vote (may be empty)
    """
    name: str
    candidates: list[Candidate]
    votes: list[Vote]
    meal_count: int = 7
    budget_limit: int | None = None
    members: list[Hashable] = field(default_factory=list)

    @property
    def voters(self) -> list[Hashable]:
        """Members, followed by anyone who voted without being listed."""
        seen = dict.fromkeys(self.members)
        for vote in self.votes:
            seen.setdefault(vote.voter_id)
        return list(seen)

    def get_candidate(self, candidate_id: Hashable) -> Candidate | None:
        for candidate in self.candidates:
            if candidate.id == candidate_id:
                return candidate
        return None

    def participation(self) -> dict[Hashable, int]:
        """Number of votes each voter cast on candidates in this session."""
        known = {c.id for c in self.candidates}
        counts = {voter: 0 for voter in self.voters}
        for vote in self.votes:
            if vote.candidate_id in known:
                counts[vote.voter_id] += 1
        return counts

    def is_voting_complete(self, total_members: int | None = None) -> bool:
        """Whether enough votes exist for every member to have voted on every candidate."""
        if total_members is None:
            total_members = len(self.members)
        if total_members == 0 or not self.candidates:
            return False
        return len(self.votes) >= total_members * len(self.candidates)
