"""Tests for consensus metrics."""

import pytest
from tests.conftest import ids, make_candidates, make_votes

from feastvote.metrics import (
    consensus_metrics,
    filter_by_minimum_consensus,
    recommendation_strength,
)
from feastvote.models import Candidate, RecommendationWeights, VoteCategory

RECIPE = Candidate(id="A", title="Lasagne")


class TestConsensusMetrics:
    def test_full_agreement(self):
        votes = make_votes({voter: {"A": "like"} for voter in ("V1", "V2", "V3", "V4")})
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.consensus_level == 100.0
        assert metrics.positive_percentage == 100.0
        assert metrics.total_votes == 4
        assert metrics.score == 4
        assert metrics.vote_counts == {VoteCategory.LIKE: 4}

    def test_all_different(self):
        """One vote in each of four categories → 25% consensus, 50% positive."""
        votes = make_votes({
            "V1": {"A": "super_like"},
            "V2": {"A": "like"},
            "V3": {"A": "ok"},
            "V4": {"A": "dislike"},
        })
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.consensus_level == 25.0
        assert metrics.positive_percentage == 50.0
        assert metrics.score == -97
        assert metrics.has_veto is False

    def test_negative_agreement_is_still_consensus(self):
        votes = make_votes({
            "V1": {"A": "dislike"},
            "V2": {"A": "dislike"},
            "V3": {"A": "dislike"},
            "V4": {"A": "like"},
        })
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.consensus_level == 75.0
        assert metrics.positive_percentage == 25.0

    def test_no_votes(self):
        votes = make_votes({"V1": {"B": "like"}})
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.total_votes == 0
        assert metrics.score == 0
        assert metrics.consensus_level == 0.0
        assert metrics.positive_percentage == 0.0
        assert metrics.has_veto is False
        assert metrics.vote_counts == {}

    def test_veto(self):
        votes = make_votes({"V1": {"A": "super_like"}, "V2": {"A": "veto"}})
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.has_veto is True
        assert metrics.score == 2
        assert metrics.vote_counts[VoteCategory.VETO] == 1

    def test_summary(self):
        votes = make_votes({"V1": {"A": "like"}, "V2": {"A": "ok"}})
        summary = consensus_metrics(RECIPE, votes).summary()
        assert "Consensus Level: 50.0%" in summary
        assert "Vetoed: no" in summary

    def test_to_dict_uses_category_names(self):
        votes = make_votes({"V1": {"A": "super_like"}})
        data = consensus_metrics(RECIPE, votes).to_dict()
        assert data["vote_counts"] == {"super_like": 1}


class TestRecommendationStrength:
    def test_vetoed_is_zero(self):
        votes = make_votes({"V1": {"A": "super_like"}, "V2": {"A": "veto"}})
        assert consensus_metrics(RECIPE, votes).recommendation_strength == 0.0

    def test_default_weights(self):
        """Score 4 of 20 → 20; 0.4 * 20 + 0.3 * 100 + 0.3 * 100 = 68."""
        votes = make_votes({voter: {"A": "like"} for voter in ("V1", "V2", "V3", "V4")})
        metrics = consensus_metrics(RECIPE, votes)
        assert metrics.recommendation_strength == pytest.approx(68.0)
        assert recommendation_strength(metrics) == pytest.approx(68.0)

    def test_negative_score_clamped_to_zero(self):
        """Score -97 contributes nothing: 0.3 * 25 + 0.3 * 50 = 22.5."""
        votes = make_votes({
            "V1": {"A": "super_like"},
            "V2": {"A": "like"},
            "V3": {"A": "ok"},
            "V4": {"A": "dislike"},
        })
        assert recommendation_strength(consensus_metrics(RECIPE, votes)) == pytest.approx(22.5)

    def test_score_capped(self):
        votes = make_votes({f"V{n}": {"A": "super_like"} for n in range(15)})
        assert recommendation_strength(consensus_metrics(RECIPE, votes)) == pytest.approx(100.0)

    def test_custom_weights(self):
        votes = make_votes({"V1": {"A": "like"}, "V2": {"A": "ok"}})
        weights = RecommendationWeights(
            score_weight=1.0, consensus_weight=0.0, positive_weight=0.0, score_cap=4,
        )
        assert recommendation_strength(consensus_metrics(RECIPE, votes), weights) == (
            pytest.approx(25.0)
        )


class TestFilterByMinimumConsensus:
    def test_default_threshold(self):
        candidates = make_candidates("A", "B", "C")
        votes = make_votes({
            "V1": {"A": "like", "B": "like", "C": "super_like"},
            "V2": {"A": "like", "B": "ok", "C": "super_like"},
            "V3": {"A": "like", "B": "dislike", "C": "veto"},
        })
        # A: 100%, B: 33%, C: 67% but vetoed
        assert ids(filter_by_minimum_consensus(candidates, votes)) == ["A"]

    def test_threshold_is_inclusive(self):
        candidates = make_candidates("A")
        votes = make_votes({"V1": {"A": "like"}, "V2": {"A": "ok"}})
        assert ids(filter_by_minimum_consensus(candidates, votes, threshold=50.0)) == ["A"]

    def test_unvoted_candidates_dropped(self):
        assert filter_by_minimum_consensus(make_candidates("A"), []) == []
