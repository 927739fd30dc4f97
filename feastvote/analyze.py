"""Orchestrator: parse a voting session and run every analysis on it."""

import logging
from dataclasses import dataclass
from typing import Any

from feastvote.metrics import consensus_metrics
from feastvote.models import (
    BudgetStatus,
    Candidate,
    ConsensusMetrics,
    VotingResult,
    VotingSession,
)
from feastvote.parsers import detect_parser, detect_parser_by_content, get_supported_formats
from feastvote.parsers.base import SessionFormatError
from feastvote.selection import budget_status, remaining_budget, smart_select, total_cost
from feastvote.voting import get_all_voting_systems

# Import parsers and voting systems to register them
from feastvote.parsers import csv_votes  # noqa: F401
from feastvote.parsers import json_session  # noqa: F401
from feastvote.voting import schulze  # noqa: F401
from feastvote.voting import scoring  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Complete analysis of a voting session."""
    session: VotingSession
    results: list[VotingResult]
    metrics: dict[Any, ConsensusMetrics]
    selection: list[Candidate]
    budget_status: BudgetStatus
    over_budget_by: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        session = self.session
        return {
            "session_name": session.name,
            "candidates": [c.to_dict() for c in session.candidates],
            "voters": session.voters,
            "num_candidates": len(session.candidates),
            "num_votes": len(session.votes),
            "meal_count": session.meal_count,
            "budget_limit": session.budget_limit,
            "voting_complete": session.is_voting_complete(),
            "participation": session.participation(),
            "results": [r.to_dict() for r in self.results],
            "metrics": {cid: m.to_dict() for cid, m in self.metrics.items()},
            "selection": [c.id for c in self.selection],
            "selection_cost": total_cost(self.selection),
            "budget_status": self.budget_status.value,
            "over_budget_by": self.over_budget_by,
            "remaining_budget": remaining_budget(self.selection, session.budget_limit),
        }


class AnalysisError(Exception):
    """Error during session analysis."""
    pass


def analyze_session(
    session: VotingSession,
    prefer_variety: bool = True,
    variety_weighted: bool = False,
) -> AnalysisResult:
    """Run all voting systems, consensus metrics and meal selection on a session."""
    candidates, votes = session.candidates, session.votes

    results = []
    for voting_system in get_all_voting_systems():
        try:
            result = voting_system.calculate(candidates, votes)
            results.append(result)
        except Exception as e:
            # Include error in results rather than failing entirely
            logger.exception("voting system %s failed", voting_system.name)
            results.append(VotingResult(
                system_name=voting_system.name,
                final_ranking=[],
                details={"error": str(e)},
            ))

    metrics = {c.id: consensus_metrics(c, votes) for c in candidates}

    selection = smart_select(
        candidates,
        votes,
        session.meal_count,
        budget_limit=session.budget_limit,
        prefer_variety=prefer_variety,
        variety_weighted=variety_weighted,
    )
    status, overage = budget_status(selection, session.budget_limit)
    logger.info(
        "session %r: selected %d of %d candidates (%s)",
        session.name, len(selection), len(candidates), status.value,
    )

    return AnalysisResult(
        session=session,
        results=results,
        metrics=metrics,
        selection=selection,
        budget_status=status,
        over_budget_by=overage,
    )


def analyze_file(
    source: str,
    content: bytes,
    prefer_variety: bool = True,
    variety_weighted: bool = False,
) -> AnalysisResult:
    """Parse a session export and analyze it.

    Args:
        source: Filename (used to detect the appropriate parser)
        content: Raw bytes of the export

    Returns:
        AnalysisResult for the parsed session

    Raises:
        AnalysisError: If no parser is found or parsing fails
    """
    # Find appropriate parser: try filename matching first, then content detection
    parser = detect_parser(source)
    if parser is None:
        parser = detect_parser_by_content(content, source)
    if parser is None:
        raise AnalysisError(
            f"We couldn't determine the session format of {source}.\n\n"
            f"{get_supported_formats()}"
        )

    try:
        session = parser.parse(source, content)
    except SessionFormatError as e:
        raise AnalysisError(f"Invalid session file: {e}") from e
    except Exception as e:
        raise AnalysisError(f"Failed to parse session: {e}") from e

    return analyze_session(
        session, prefer_variety=prefer_variety, variety_weighted=variety_weighted
    )
