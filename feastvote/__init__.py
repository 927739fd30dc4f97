"""Consensus voting engine for household meal planning."""

from feastvote.metrics import consensus_metrics, filter_by_minimum_consensus
from feastvote.models import Candidate, Difficulty, Vote, VoteCategory
from feastvote.selection import smart_select
from feastvote.voting.pairwise import build_pairwise_matrix
from feastvote.voting.schulze import compute_strongest_paths, schulze_rank
from feastvote.voting.scoring import score_candidates, select_top

__all__ = [
    "Candidate",
    "Difficulty",
    "Vote",
    "VoteCategory",
    "build_pairwise_matrix",
    "compute_strongest_paths",
    "consensus_metrics",
    "filter_by_minimum_consensus",
    "schulze_rank",
    "score_candidates",
    "select_top",
    "smart_select",
]
