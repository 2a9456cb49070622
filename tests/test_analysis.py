"""
Tests for record building, filtering and group summaries.
"""

import pytest

from peptidescope import build_records
from peptidescope.analysis import (
    by_source,
    composition_by_group,
    length_distribution,
    summarize,
)
from peptidescope.core.models import ModelScoreSet
from peptidescope.filters import FilterCriteria, filter_records, passes


MAGAININ_2 = "GIGKFLHSAKKFGKAFVGEIMNS"
INDOLICIDIN = "ILPWKWPWWPWRR"
SHORT_CATIONIC = "KWKLFKKI"

SCORES = {
    MAGAININ_2: ModelScoreSet(xgboost=90, random_forest=80),
    INDOLICIDIN: ModelScoreSet(xgboost=30),
}


@pytest.fixture
def records():
    """Three peptides; the last has no entry in the score index."""
    return build_records(
        [("mag2", MAGAININ_2), ("indo", INDOLICIDIN), ("", SHORT_CATIONIC)],
        scores=SCORES,
        source="prediction",
    )


class TestBuildRecords:
    """Tests for assembling PeptideRecords."""

    def test_consensus_attached(self, records):
        assert records[0].consensus_score == pytest.approx(0.85)
        assert records[1].consensus_score == pytest.approx(0.30)

    def test_missing_entry_is_unknown(self, records):
        """A peptide missing from the score index is unknown, not 0."""
        assert records[2].consensus is not None
        assert records[2].consensus_score is None
        assert records[2].consensus.display() == "unknown"

    def test_no_score_index(self):
        records = build_records([("mag2", MAGAININ_2)])
        assert records[0].consensus is None
        assert records[0].consensus_score is None

    def test_generated_id(self, records):
        assert records[2].id.startswith("pep-")
        assert len(records[2].id) == len("pep-") + 8

    def test_order_and_source(self, records):
        assert [r.sequence for r in records] == [MAGAININ_2, INDOLICIDIN, SHORT_CATIONIC]
        assert all(r.source == "prediction" for r in records)

    def test_lowercase_input_not_matched_to_scores(self):
        """Lower-case letters are non-canonical, so the peptide is a different one."""
        records = build_records([("mag2", MAGAININ_2.lower())], scores=SCORES)
        assert records[0].sequence == MAGAININ_2.lower()
        assert records[0].profile.molecular_weight == pytest.approx(18.01528)
        assert records[0].consensus is not None
        assert records[0].consensus_score is None

    def test_threaded_profiling(self):
        pairs = [(f"p{i}", seq) for i, seq in enumerate([MAGAININ_2, INDOLICIDIN] * 5)]
        records = build_records(pairs, max_workers=3)
        assert [r.id for r in records] == [p[0] for p in pairs]


class TestFilters:
    """Tests for score, length and residue filtering."""

    def test_defaults_keep_everything(self, records):
        assert filter_records(records, FilterCriteria()) == records

    def test_score_threshold(self, records):
        kept = filter_records(records, FilterCriteria(min_score=0.5, keep_unscored=False))
        assert [r.id for r in kept] == ["mag2"]

    def test_unknown_kept_when_requested(self, records):
        kept = filter_records(records, FilterCriteria(min_score=0.5, keep_unscored=True))
        assert [r.sequence for r in kept] == [MAGAININ_2, SHORT_CATIONIC]

    def test_unknown_never_read_as_zero(self):
        """With no score constraint an unscored peptide passes."""
        record = build_records([("x", SHORT_CATIONIC)], scores={})[0]
        assert passes(record, FilterCriteria(min_score=0.0, keep_unscored=False))

    def test_length_range(self, records):
        kept = filter_records(records, FilterCriteria(min_length=9, max_length=20))
        assert [r.id for r in kept] == ["indo"]

    def test_length_bounds_inclusive(self, records):
        kept = filter_records(records, FilterCriteria(min_length=8, max_length=13))
        assert len(kept) == 2

    def test_excluded_residues(self, records):
        kept = filter_records(records, FilterCriteria(excluded_residues=frozenset("pw")))
        assert [r.id for r in kept] == ["mag2"]

    def test_invalid_criteria(self):
        with pytest.raises(ValueError):
            FilterCriteria(min_score=1.5)
        with pytest.raises(ValueError):
            FilterCriteria(min_length=10, max_length=5)


class TestSummaries:
    """Tests for group-level summaries."""

    def test_summarize_single_group(self, records):
        summary = summarize(records)["prediction"]
        assert summary.count == 3
        assert summary.mean_length == pytest.approx((23 + 13 + 8) / 3)
        assert summary.n_scored == 2
        assert summary.mean_consensus == pytest.approx((0.85 + 0.30) / 2)
        expected_pi = sum(r.profile.isoelectric_point for r in records) / 3
        assert summary.mean_isoelectric_point == pytest.approx(expected_pi)

    def test_group_without_scores(self):
        records = build_records([("a", MAGAININ_2)], source="stability")
        summary = summarize(records)["stability"]
        assert summary.mean_consensus is None
        assert summary.n_scored == 0

    def test_multiple_groups(self):
        records = (
            build_records([("a", MAGAININ_2)], source="prediction")
            + build_records([("b", INDOLICIDIN), ("c", SHORT_CATIONIC)], source="stability")
        )
        summaries = summarize(records)
        assert set(summaries) == {"prediction", "stability"}
        assert summaries["stability"].count == 2

    def test_unlabelled_records_grouped_together(self):
        records = build_records([("a", MAGAININ_2)])
        assert by_source(records[0]) == "all"
        assert set(summarize(records)) == {"all"}

    def test_custom_group_key(self, records):
        summaries = summarize(records, key=lambda r: "long" if r.length > 10 else "short")
        assert summaries["long"].count == 2
        assert summaries["short"].count == 1

    def test_composition(self):
        records = build_records([("a", "KKWW"), ("b", "KKKK")], source="g")
        composition = composition_by_group(records)["g"]
        assert composition["K"] == pytest.approx(75.0)
        assert composition["W"] == pytest.approx(25.0)
        assert sum(composition.values()) == pytest.approx(100.0)

    def test_composition_of_empty_peptides(self):
        records = build_records([("a", "")], source="g")
        assert set(composition_by_group(records)["g"].values()) == {0.0}

    def test_length_distribution(self, records):
        extra = build_records([("d", "KWKLFKKW")], source="prediction")
        distribution = length_distribution(records + extra)["prediction"]
        assert distribution == {8: 2, 13: 1, 23: 1}
        assert list(distribution) == [8, 13, 23]
