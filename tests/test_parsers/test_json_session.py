"""Tests for the JSON session parser."""

import json
from datetime import datetime, timezone

import pytest

from feastvote.models import Difficulty, Vote, VoteCategory
from feastvote.parsers.base import SessionFormatError
from feastvote.parsers.json_session import JsonSessionParser


def dump(data) -> bytes:
    return json.dumps(data).encode("utf-8")


class TestJsonSessionParser:
    def setup_method(self):
        self.parser = JsonSessionParser()

    def test_can_parse(self):
        assert self.parser.can_parse("week-3.json")
        assert self.parser.can_parse("exports/WEEK.JSON")
        assert not self.parser.can_parse("votes.csv")

    def test_can_parse_content(self, session_json):
        assert self.parser.can_parse_content(session_json, "upload")
        assert not self.parser.can_parse_content(b'{"votes": []}', "upload")
        assert not self.parser.can_parse_content(b"voter,candidate,category", "upload")

    def test_parse_session_fields(self, session_json):
        session = self.parser.parse("session.json", session_json)
        assert session.name == "Week of Jan 15"
        assert session.meal_count == 2
        assert session.budget_limit == 3000
        assert session.members == ["Alice", "Ben", "Cora"]
        assert len(session.votes) == 12

    def test_parse_candidates(self, session_json):
        session = self.parser.parse("session.json", session_json)
        tacos, risotto, curry, _ = session.candidates
        assert tacos.cost == 1200
        assert tacos.difficulty is Difficulty.EASY
        assert risotto.cost == 1600  # 400 per serving x 4
        assert curry.difficulty is Difficulty.MEDIUM

    def test_parse_votes(self, session_json):
        votes = self.parser.parse("session.json", session_json).votes
        assert votes[0].category is VoteCategory.SUPER_LIKE
        assert votes[0].timestamp == datetime(2026, 1, 15, 18, 30, tzinfo=timezone.utc)
        assert votes[4].timestamp.tzinfo == timezone.utc  # naive → UTC
        assert votes[7].category is VoteCategory.VETO
        assert votes[7].comment == "peanut allergy"

    def test_categories_round_trip(self):
        votes = [
            Vote(voter_id="mom", candidate_id="r1", category=category)
            for category in VoteCategory
        ]
        content = dump({
            "candidates": [{"id": "r1"}],
            "votes": [v.to_dict() for v in votes],
        })
        parsed = self.parser.parse("s.json", content)
        assert [v.category for v in parsed.votes] == list(VoteCategory)
        assert parsed.votes == votes

    def test_defaults(self):
        session = self.parser.parse("week-3.json", dump({"candidates": [], "votes": []}))
        assert session.name == "week-3"
        assert session.meal_count == 7
        assert session.budget_limit is None
        assert session.members == []

    def test_invalid_json(self):
        with pytest.raises(SessionFormatError, match="Not valid JSON"):
            self.parser.parse("s.json", b"{not json")

    def test_missing_votes(self):
        with pytest.raises(SessionFormatError, match="'votes'"):
            self.parser.parse("s.json", dump({"candidates": []}))

    def test_unknown_category(self):
        content = dump({
            "candidates": [{"id": "r1"}],
            "votes": [{"voter": "mom", "candidate": "r1", "category": "meh"}],
        })
        with pytest.raises(SessionFormatError, match="Unknown vote category"):
            self.parser.parse("s.json", content)

    def test_vote_missing_field(self):
        content = dump({"candidates": [], "votes": [{"voter": "mom", "candidate": "r1"}]})
        with pytest.raises(SessionFormatError, match="category"):
            self.parser.parse("s.json", content)

    def test_cost_must_be_integer_cents(self):
        content = dump({"candidates": [{"id": "r1", "cost": 12.5}], "votes": []})
        with pytest.raises(SessionFormatError, match="'cost' must be an integer"):
            self.parser.parse("s.json", content)

    def test_unknown_difficulty(self):
        content = dump({"candidates": [{"id": "r1", "difficulty": "extreme"}], "votes": []})
        with pytest.raises(SessionFormatError, match="Unknown difficulty"):
            self.parser.parse("s.json", content)

    def test_candidate_without_id(self):
        with pytest.raises(SessionFormatError, match="without an id"):
            self.parser.parse("s.json", dump({"candidates": [{"title": "x"}], "votes": []}))

    def test_integer_ids_accepted(self):
        content = dump({
            "members": [1, 2],
            "candidates": [{"id": 10}],
            "votes": [{"voter": 1, "candidate": 10, "category": "like"}],
        })
        session = self.parser.parse("s.json", content)
        assert session.members == [1, 2]
        assert session.candidates[0].id == 10
        assert session.votes[0].voter_id == 1

    @pytest.mark.parametrize("bad_id", [["r1"], {"id": "r1"}, True, 1.5, None])
    def test_candidate_id_must_be_scalar(self, bad_id):
        content = dump({"candidates": [{"id": bad_id}], "votes": []})
        with pytest.raises(SessionFormatError, match="candidate id must be a string or integer"):
            self.parser.parse("s.json", content)

    def test_voter_must_be_scalar(self):
        content = dump({
            "candidates": [{"id": "r1"}],
            "votes": [{"voter": {"name": "mom"}, "candidate": "r1", "category": "like"}],
        })
        with pytest.raises(SessionFormatError, match="voter must be a string or integer"):
            self.parser.parse("s.json", content)

    def test_vote_candidate_must_be_scalar(self):
        content = dump({
            "candidates": [{"id": "r1"}],
            "votes": [{"voter": "mom", "candidate": ["r1"], "category": "like"}],
        })
        with pytest.raises(SessionFormatError, match="candidate must be a string or integer"):
            self.parser.parse("s.json", content)

    def test_members_must_be_a_list(self):
        content = dump({"members": "mom", "candidates": [], "votes": []})
        with pytest.raises(SessionFormatError, match="'members' must be a list"):
            self.parser.parse("s.json", content)

    def test_member_entries_must_be_scalar(self):
        content = dump({"members": ["mom", ["dad"]], "candidates": [], "votes": []})
        with pytest.raises(SessionFormatError, match="member must be a string or integer"):
            self.parser.parse("s.json", content)

    def test_null_members(self):
        content = dump({"members": None, "candidates": [], "votes": []})
        assert self.parser.parse("s.json", content).members == []
