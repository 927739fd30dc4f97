"""Parser for JSON voting-session exports."""

import json
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any

from feastvote.models import Candidate, Difficulty, Vote, VoteCategory, VotingSession
from feastvote.parsers import register_parser
from feastvote.parsers.base import SessionFormatError, SessionParser


@register_parser
class JsonSessionParser(SessionParser):
    """Parser for the JSON session export.

    Expected shape:

        {
          "name": "Week of Jan 15",
          "meal_count": 5,
          "budget_limit": 5000,
          "members": ["mom", "dad", "kid"],
          "candidates": [
            {"id": "r1", "title": "Tacos", "cost": 1200,
             "cuisine": "Mexican", "difficulty": "easy"}
          ],
          "votes": [
            {"voter": "mom", "candidate": "r1", "category": "like",
             "comment": null, "timestamp": "2026-01-15T18:30:00+00:00"}
          ]
        }

    Only "candidates" and "votes" are required. A candidate may give
    "cost_per_serving" and "servings" instead of "cost". Costs are integer
    cents.
    """

    SUFFIX = ".json"
    FORMAT_DESCRIPTION = "JSON session exports (*.json)"

    def can_parse(self, source: str) -> bool:
        return PurePath(source).suffix.lower() == self.SUFFIX

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Tell-tale sign: a JSON object with "candidates" and "votes" keys."""
        try:
            data = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return isinstance(data, dict) and "candidates" in data and "votes" in data

    def parse(self, source: str, content: bytes) -> VotingSession:
        try:
            data = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SessionFormatError(f"Not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SessionFormatError("Session must be a JSON object")
        for key in ("candidates", "votes"):
            if not isinstance(data.get(key), list):
                raise SessionFormatError(f"Session is missing a '{key}' list")

        candidates = [self._parse_candidate(entry) for entry in data["candidates"]]
        votes = [self._parse_vote(entry) for entry in data["votes"]]

        return VotingSession(
            name=data.get("name") or PurePath(source).stem,
            candidates=candidates,
            votes=votes,
            meal_count=_optional_int(data, "meal_count", default=7),
            budget_limit=_optional_int(data, "budget_limit"),
            members=self._parse_members(data.get("members")),
        )

    def _parse_members(self, members: Any) -> list[str | int]:
        if members is None:
            return []
        if not isinstance(members, list):
            raise SessionFormatError(f"'members' must be a list of ids, got {members!r}")
        return [_identifier(member, "member") for member in members]

    def _parse_candidate(self, entry: Any) -> Candidate:
        if not isinstance(entry, dict) or "id" not in entry:
            raise SessionFormatError(f"Candidate entry without an id: {entry!r}")
        candidate_id = _identifier(entry["id"], "candidate id")

        difficulty_name = entry.get("difficulty") or Difficulty.MEDIUM.value
        try:
            difficulty = Difficulty(difficulty_name.lower())
        except (ValueError, AttributeError):
            raise SessionFormatError(
                f"Unknown difficulty {difficulty_name!r} for candidate {candidate_id!r}"
            ) from None

        fields = {
            "title": entry.get("title") or "",
            "cuisine": entry.get("cuisine"),
            "difficulty": difficulty,
        }
        if entry.get("cost") is None and "cost_per_serving" in entry:
            return Candidate.from_serving_cost(
                candidate_id,
                _optional_int(entry, "cost_per_serving"),
                _optional_int(entry, "servings", default=4),
                **fields,
            )
        return Candidate(id=candidate_id, cost=_optional_int(entry, "cost"), **fields)

    def _parse_vote(self, entry: Any) -> Vote:
        if not isinstance(entry, dict):
            raise SessionFormatError(f"Vote entry must be an object: {entry!r}")
        try:
            voter, candidate, category = entry["voter"], entry["candidate"], entry["category"]
        except KeyError as e:
            raise SessionFormatError(f"Vote entry is missing {e}: {entry!r}") from None

        try:
            parsed_category = VoteCategory.parse(str(category))
        except ValueError as e:
            raise SessionFormatError(str(e)) from e

        extra = {}
        if entry.get("timestamp"):
            extra["timestamp"] = _parse_timestamp(entry["timestamp"])

        return Vote(
            voter_id=_identifier(voter, "voter"),
            candidate_id=_identifier(candidate, "candidate"),
            category=parsed_category,
            comment=entry.get("comment"),
            **extra,
        )


def _optional_int(data: dict, key: str, default: int | None = None) -> int | None:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise SessionFormatError(f"'{key}' must be an integer, got {value!r}")
    return value


def _identifier(value: Any, what: str) -> str | int:
    """Ids are JSON strings or integers; anything else can't key a ranking."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise SessionFormatError(f"{what} must be a string or integer, got {value!r}")
    return value


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive timestamps are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise SessionFormatError(f"Invalid timestamp: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
