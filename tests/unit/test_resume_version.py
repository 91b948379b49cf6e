"""Unit Tests for the Resume Version Analyzer"""

from job_tracker.insights import compute_resume_version_insights

from conftest import make_record


class TestVersionAggregates:
    """Test per-version counts and rates"""

    def test_offer_and_rejection(self):
        """Test one offer and one rejection on the same version"""
        records = [
            make_record("Offer", resume_version="1.0"),
            make_record("Rejected", resume_version="1.0"),
        ]

        result = compute_resume_version_insights(records)

        version = result.versions[0]
        assert version.version == "1.0"
        assert version.success_rate == 50
        assert version.rejection_rate == 50
        assert version.offer_rate == 50
        assert version.interview_rate == 0

    def test_success_counts_interviews_and_offers(self, mixed_records):
        """Test success rate is the share reaching interview or offer"""
        result = compute_resume_version_insights(mixed_records)
        by_version = {v.version: v for v in result.versions}

        v2 = by_version["2.0"]
        assert v2.total_applications == 4
        assert v2.interview_rate == 50
        assert v2.offer_rate == 25
        assert v2.success_rate == 75
        assert v2.rejection_rate == 0

        v1 = by_version["1.0"]
        assert v1.total_applications == 4
        assert v1.rejection_rate == 75
        assert v1.success_rate == 0

    def test_rates_need_not_sum_to_100(self):
        """Test success and rejection are independent for versions"""
        records = [
            make_record("Interview", resume_version="3.0"),
            make_record("Applied", resume_version="3.0"),
            make_record("Withdrawn", resume_version="3.0"),
        ]

        version = compute_resume_version_insights(records).versions[0]

        assert version.success_rate == 33
        assert version.rejection_rate == 0
        assert version.success_rate + version.rejection_rate != 100

    def test_best_and_worst(self, mixed_records):
        """Test ranking by success rate"""
        result = compute_resume_version_insights(mixed_records)

        assert result.best_version.version == "2.0"
        assert result.worst_version.version == "1.0"

    def test_single_version_is_best_and_worst(self):
        """Test a lone version fills both slots"""
        result = compute_resume_version_insights([make_record("Interview", resume_version="1.0")])

        assert result.best_version.version == "1.0"
        assert result.worst_version.version == "1.0"

    def test_tie_goes_to_first_version(self):
        """Test equal success rates resolve to the earliest version"""
        records = [
            make_record("Applied", resume_version="A"),
            make_record("Applied", resume_version="B"),
        ]

        result = compute_resume_version_insights(records)

        assert result.best_version.version == "A"
        assert result.worst_version.version == "A"


class TestVersionNarrative:
    """Test the resume version narrative"""

    def test_empty_dataset(self):
        """Test empty input gives a no-data narrative"""
        result = compute_resume_version_insights([])

        assert result.versions == []
        assert result.best_version is None
        assert result.worst_version is None
        assert result.narrative == (
            "📄 **Resume Version Performance Analysis**\n"
            "No resume version data available for analysis."
        )

    def test_best_and_worst_blocks(self, mixed_records):
        """Test the best and lowest performing blocks"""
        narrative = compute_resume_version_insights(mixed_records).narrative

        assert "🏆 **Best Performing Version**: Resume 2.0" in narrative
        assert "👎 **Lowest Performing Version**: Resume 1.0" in narrative
        assert "   - Success Rate: 75%" in narrative
        assert "   - Total Applications: 4" in narrative

    def test_recommendation_and_warning(self, mixed_records):
        """Test the large-gap recommendation and high-rejection warning"""
        narrative = compute_resume_version_insights(mixed_records).narrative

        assert "💡 **Recommendation**: Consider using Resume 2.0 as your primary template." in narrative
        assert "⚠️ **Warning**: Resume 1.0 has a high rejection rate" in narrative

    def test_no_recommendation_for_small_gap(self):
        """Test no template recommendation when versions are close"""
        records = [
            make_record("Interview", resume_version="1.0"),
            make_record("Applied", resume_version="1.0"),
            make_record("Interview", resume_version="2.0"),
            make_record("Applied", resume_version="2.0"),
        ]

        narrative = compute_resume_version_insights(records).narrative

        assert "primary template" not in narrative
        assert "high rejection rate" not in narrative

    def test_all_versions_listed(self, mixed_records):
        """Test every version appears in the summary list"""
        narrative = compute_resume_version_insights(mixed_records).narrative

        assert "📊 **All Resume Versions**:" in narrative
        assert "- Resume 1.0: 0% success rate (0% interviews, 0% offers)" in narrative
        assert "- Resume 2.0: 75% success rate (50% interviews, 25% offers)" in narrative
