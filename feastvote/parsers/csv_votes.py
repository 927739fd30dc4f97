"""Parser for CSV vote tallies."""

import csv
import io
from pathlib import PurePath

from feastvote.models import Candidate, Vote, VoteCategory, VotingSession
from feastvote.parsers import register_parser
from feastvote.parsers.base import SessionFormatError, SessionParser


@register_parser
class CsvVotesParser(SessionParser):
    """Parser for a plain vote tally, one vote per row.

    Columns: voter, candidate, category, and optionally comment. There is no
    candidate metadata in this format, so candidates are created bare (no
    cost, cuisine or title) in the order they first appear, and the members
    are the distinct voters.

        voter,candidate,category,comment
        mom,tacos,super_like,
        dad,tacos,veto,allergic to cilantro
    """

    SUFFIX = ".csv"
    REQUIRED_COLUMNS = ("voter", "candidate", "category")
    FORMAT_DESCRIPTION = "CSV vote tallies with voter, candidate, category columns (*.csv)"

    def can_parse(self, source: str) -> bool:
        return PurePath(source).suffix.lower() == self.SUFFIX

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Tell-tale sign: a header row containing all required columns."""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            return False
        try:
            first_row = next(csv.reader(io.StringIO(text)), [])
        except csv.Error:
            return False
        header = {h.strip().lower() for h in first_row}
        return all(column in header for column in self.REQUIRED_COLUMNS)

    def parse(self, source: str, content: bytes) -> VotingSession:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SessionFormatError(f"CSV is not UTF-8: {e}") from e

        reader = csv.DictReader(io.StringIO(text))
        if reader.fieldnames is None:
            raise SessionFormatError("CSV file is empty")
        reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
        missing = [c for c in self.REQUIRED_COLUMNS if c not in reader.fieldnames]
        if missing:
            raise SessionFormatError(f"CSV is missing columns: {', '.join(missing)}")

        candidate_ids: dict[str, None] = {}
        voters: dict[str, None] = {}
        votes = []
        for line_number, row in enumerate(reader, start=2):
            voter = (row["voter"] or "").strip()
            candidate = (row["candidate"] or "").strip()
            if not voter or not candidate:
                raise SessionFormatError(f"Line {line_number}: voter and candidate are required")
            try:
                category = VoteCategory.parse(row["category"] or "")
            except ValueError as e:
                raise SessionFormatError(f"Line {line_number}: {e}") from e

            candidate_ids.setdefault(candidate)
            voters.setdefault(voter)
            votes.append(Vote(
                voter_id=voter,
                candidate_id=candidate,
                category=category,
                comment=(row.get("comment") or "").strip() or None,
            ))

        return VotingSession(
            name=PurePath(source).stem,
            candidates=[Candidate(id=cid, title=cid) for cid in candidate_ids],
            votes=votes,
            members=list(voters),
        )
