"""Analyze a voting-session export from the command line.

Prints each voting system's ranking, the consensus metrics per candidate and
the final meal selection.

Usage:
    python scripts/analyze_session.py examples/sample-session.json
    python scripts/analyze_session.py votes.csv --count 3 --budget 4000
    python scripts/analyze_session.py session.json --json > report.json
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add the project root to the path so we can import feastvote
sys.path.insert(0, str(Path(__file__).parent.parent))

from feastvote.analyze import AnalysisError, AnalysisResult, analyze_file, analyze_session
from feastvote.selection import remaining_budget


def format_cents(cents: int | None) -> str:
    if cents is None:
        return "-"
    return f"${cents / 100:.2f}"


def print_report(analysis: AnalysisResult) -> None:
    session = analysis.session
    titles = {c.id: c.title or str(c.id) for c in session.candidates}

    print(f"{session.name}: {len(session.candidates)} candidates, "
          f"{len(session.votes)} votes from {len(session.voters)} voters")
    if not session.is_voting_complete():
        print("Voting is not complete yet.")

    for result in analysis.results:
        print()
        print(result.system_name)
        if "error" in result.details:
            print(f"  error: {result.details['error']}")
            continue
        for placement in result.final_ranking:
            marker = "=" if placement.tied else " "
            print(f"  {placement.rank:>3}{marker} {titles[placement.candidate_id]}")
        vetoed = result.details.get("vetoed") or []
        if vetoed:
            print(f"  vetoed: {', '.join(titles[cid] for cid in vetoed)}")

    print()
    print(f"{'Candidate':<30} {'Score':>6} {'Cons%':>6} {'Pos%':>6} {'Rec':>6}")
    for cid, metrics in analysis.metrics.items():
        score = "veto" if metrics.has_veto else str(metrics.score)
        print(f"{titles[cid][:30]:<30} {score:>6} {metrics.consensus_level:>6.1f} "
              f"{metrics.positive_percentage:>6.1f} {metrics.recommendation_strength:>6.1f}")

    print()
    print(f"Selected {len(analysis.selection)} of {session.meal_count} meals "
          f"(budget {format_cents(session.budget_limit)}):")
    for candidate in analysis.selection:
        print(f"  - {titles[candidate.id]} ({format_cents(candidate.cost)})")
    remaining = remaining_budget(analysis.selection, session.budget_limit)
    print(f"Budget status: {analysis.budget_status.value} "
          f"(remaining {format_cents(remaining)})")


def main():
    parser = argparse.ArgumentParser(
        description="Rank candidates and select meals from a voting session")
    parser.add_argument("input", help="Path to a session export (.json or .csv)")
    parser.add_argument("-n", "--count", type=int,
                        help="Number of meals to select (default: the session's meal count)")
    parser.add_argument("-b", "--budget", type=int,
                        help="Budget limit in cents (default: the session's budget)")
    parser.add_argument("--no-variety", action="store_true",
                        help="Skip the variety pass")
    parser.add_argument("--weighted-variety", action="store_true",
                        help="Let the variety bonus reorder the selection")
    parser.add_argument("--json", action="store_true",
                        help="Print the full analysis as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress (-vv for debug output)")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.input)
    options = {
        "prefer_variety": not args.no_variety,
        "variety_weighted": args.weighted_variety,
    }
    try:
        analysis = analyze_file(path.name, path.read_bytes(), **options)
    except (AnalysisError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.count is not None or args.budget is not None:
        session = replace(
            analysis.session,
            meal_count=analysis.session.meal_count if args.count is None else args.count,
            budget_limit=analysis.session.budget_limit if args.budget is None else args.budget,
        )
        analysis = analyze_session(session, **options)

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2, default=str))
    else:
        print_report(analysis)


if __name__ == "__main__":
    main()
