"""Abstract base class for voting systems."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from feastvote.models import Candidate, Vote, VotingResult


class VotingSystem(ABC):
    """Abstract base class for voting systems.

    Each voting system implementation ranks candidates from a set of votes
    using its own algorithm. Systems are registered via the
    @register_voting_system decorator in feastvote/voting/__init__.py.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this voting system."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this voting system works."""
        return ""

    @abstractmethod
    def calculate(
        self, candidates: Sequence[Candidate], votes: Sequence[Vote]
    ) -> VotingResult:
        """Calculate the final ranking using this voting system.

        Args:
            candidates: The candidates being voted on, in display order
            votes: All votes cast; votes on unknown candidates are ignored

        Returns:
            VotingResult with the final ranking and calculation details
        """
        pass


def group_ties(ordered: list, metric: dict) -> list:
    """Group consecutive entries with an equal metric into tie lists.

    ``ordered`` must already be sorted by ``metric``. Returns the shape
    expected by Placement.build_ranking: single entries stay as they are,
    runs of equal metric become a list.
    """
    grouped: list = []
    i = 0
    while i < len(ordered):
        j = i + 1
        while j < len(ordered) and metric[ordered[j]] == metric[ordered[i]]:
            j += 1
        if j - i == 1:
            grouped.append(ordered[i])
        else:
            grouped.append(ordered[i:j])
        i = j
    return grouped
