"""Test district, feature, rating and tag filters."""

import pytest

from cafe_ranking.config import VALID_DISTRICTS, VALID_FEATURES
from cafe_ranking.filters.base import FilterStatistics, retention_rate
from cafe_ranking.filters.district import DistrictFilter
from cafe_ranking.filters.feature import FeatureFilter
from cafe_ranking.filters.rating import RatingFilter
from cafe_ranking.filters.tag import TagFilter


def ids(records):
    return [record.entity_id for record in records]


class TestDistrictFilter:
    """Test district membership filtering."""

    def test_single_district(self, ranked_results):
        """Test only records in the allowed district survive, in order."""
        district_filter = DistrictFilter({"大安區"})

        filtered = district_filter.filter(ranked_results)

        assert ids(filtered) == ["cafe_001", "cafe_003", "cafe_010", "cafe_005", "cafe_008"]
        assert all(record.district == "大安區" for record in filtered)

    def test_or_semantics(self, ranked_results):
        """Test multiple districts are combined with OR."""
        filtered = DistrictFilter(["中山區", "信義區"]).filter(ranked_results)

        assert ids(filtered) == ["cafe_002", "cafe_004"]

    def test_string_argument(self, ranked_results):
        """Test a single district name can be passed as a string."""
        filtered = DistrictFilter("士林區").filter(ranked_results)

        assert ids(filtered) == ["cafe_009"]

    def test_unconfigured_is_identity(self, ranked_results):
        """Test an empty filter returns an equal but new list."""
        district_filter = DistrictFilter()

        filtered = district_filter.filter(ranked_results)

        assert filtered == ranked_results
        assert filtered is not ranked_results

    def test_missing_district_excluded(self, ranked_results):
        """Test records without a district never pass a configured filter."""
        filtered = DistrictFilter(VALID_DISTRICTS).filter(ranked_results)

        assert "cafe_007" not in ids(filtered)
        assert len(filtered) == 9

    def test_empty_and_none_input(self):
        """Test empty or missing input yields an empty list."""
        district_filter = DistrictFilter("大安區")

        assert district_filter.filter([]) == []
        assert district_filter.filter(None) == []

    def test_exact_match_only(self, make_record):
        """Test district names are compared exactly."""
        records = [make_record("a", district="大安"), make_record("b", district="大安區 ")]

        assert DistrictFilter("大安區").filter(records) == []

    def test_filter_does_not_mutate_input(self, ranked_results):
        """Test the input list is left untouched."""
        snapshot = list(ranked_results)

        DistrictFilter("大安區").filter(ranked_results)

        assert ranked_results == snapshot

    def test_mutation_surface(self):
        """Test add, remove and clear of districts."""
        district_filter = DistrictFilter()
        district_filter.add_district("大安區")
        district_filter.add_district("大安區")
        district_filter.add_district("中山區")

        assert district_filter.districts == ["大安區", "中山區"]
        assert district_filter.district_count == 2
        assert "大安區" in district_filter
        assert district_filter.contains_district("中山區")

        district_filter.remove_district("大安區")
        district_filter.remove_district("北投區")
        assert district_filter.districts == ["中山區"]

        district_filter.clear_districts()
        assert district_filter.is_empty()

    def test_districts_setter_replaces(self):
        """Test assigning districts replaces the previous set."""
        district_filter = DistrictFilter(["大安區"])
        district_filter.districts = ["信義區", "松山區"]

        assert district_filter.districts == ["信義區", "松山區"]

    def test_districts_property_is_copy(self):
        """Test mutating the returned list does not change the filter."""
        district_filter = DistrictFilter("大安區")
        district_filter.districts.append("中山區")

        assert district_filter.districts == ["大安區"]

    def test_description(self):
        """Test human-readable description."""
        assert DistrictFilter().description == "District filter (unrestricted)"
        assert DistrictFilter(["大安區", "中山區"]).description == "District filter (大安區, 中山區)"
        assert str(DistrictFilter("大安區")) == "District filter (大安區)"

    def test_catalog_helpers(self):
        """Test catalog validity checks."""
        assert DistrictFilter.is_valid_district("大安區")
        assert not DistrictFilter.is_valid_district("板橋區")
        assert len(DistrictFilter.all_valid_districts()) == 12

    def test_copy_and_equality(self):
        """Test copies are equal but independent."""
        original = DistrictFilter(["大安區"])
        clone = original.copy()
        clone.add_district("中山區")

        assert original == DistrictFilter("大安區")
        assert original != clone

    def test_hashable(self):
        """Test equal filters hash alike and can live in sets."""
        assert hash(DistrictFilter(["大安區", "中山區"])) == hash(DistrictFilter(["大安區", "中山區"]))
        assert len({DistrictFilter("大安區"), DistrictFilter("大安區"), DistrictFilter("信義區")}) == 2

    def test_statistics(self, ranked_results):
        """Test statistics carry counts and criteria."""
        district_filter = DistrictFilter("大安區")
        filtered = district_filter.filter(ranked_results)

        stats = district_filter.statistics(ranked_results, filtered)

        assert stats.original_count == 10
        assert stats.filtered_count == 5
        assert stats.removed_count == 5
        assert stats.retention == pytest.approx(50.0)
        assert stats.criteria == ("大安區",)
        assert stats.mode is None

    def test_callable_aliases(self, ranked_results):
        """Test apply and call delegate to filter."""
        district_filter = DistrictFilter("大安區")

        assert district_filter(ranked_results) == district_filter.filter(ranked_results)
        assert district_filter.apply(ranked_results) == district_filter.filter(ranked_results)


class TestFeatureFilter:
    """Test feature tag filtering."""

    def test_match_all(self, ranked_results):
        """Test match-all keeps records offering every required feature."""
        feature_filter = FeatureFilter({"不限時", "有插座"}, match_all=True)

        filtered = feature_filter.filter(ranked_results)

        assert ids(filtered) == ["cafe_001", "cafe_009", "cafe_010"]
        for record in filtered:
            assert {"不限時", "有插座"} <= set(record.features)

    def test_match_any(self, ranked_results):
        """Test match-any keeps records sharing at least one feature."""
        feature_filter = FeatureFilter.create_match_any(["不限時", "有插座"])

        filtered = feature_filter.filter(ranked_results)

        assert ids(filtered) == [
            "cafe_001", "cafe_003", "cafe_009", "cafe_010", "cafe_002", "cafe_004",
        ]

    def test_match_all_subset_of_match_any(self, ranked_results):
        """Test match-all output is contained in match-any output."""
        features = ["不限時", "有插座", "有wifi"]

        all_ids = set(ids(FeatureFilter.create_match_all(features).filter(ranked_results)))
        any_ids = set(ids(FeatureFilter.create_match_any(features).filter(ranked_results)))

        assert all_ids <= any_ids

    def test_records_without_features_excluded(self, ranked_results):
        """Test a record with no features never passes."""
        filtered = FeatureFilter(VALID_FEATURES, match_all=False).filter(ranked_results)

        assert "cafe_008" not in ids(filtered)

    def test_unconfigured_is_identity(self, ranked_results):
        """Test an empty filter passes everything in order."""
        assert FeatureFilter().filter(ranked_results) == ranked_results
        assert FeatureFilter(match_all=False).filter(ranked_results) == ranked_results

    def test_empty_and_none_input(self):
        """Test empty or missing input yields an empty list."""
        feature_filter = FeatureFilter("安靜")

        assert feature_filter.filter([]) == []
        assert feature_filter.filter(None) == []

    def test_match_mode_switch(self, make_record):
        """Test toggling match_all changes results."""
        records = [
            make_record("both", features=["安靜", "明亮"]),
            make_record("one", features=["安靜"]),
            make_record("none"),
        ]
        feature_filter = FeatureFilter(["安靜", "明亮"])

        assert ids(feature_filter.filter(records)) == ["both"]

        feature_filter.match_all = False
        assert ids(feature_filter.filter(records)) == ["both", "one"]

    def test_matched_and_missing_features(self, make_record):
        """Test per-record match diagnostics."""
        record = make_record("x", features=["有wifi", "安靜"])
        feature_filter = FeatureFilter(["安靜", "有插座", "有wifi"])

        assert feature_filter.count_matched_features(record) == 2
        assert feature_filter.get_missing_features(record) == ["有插座"]

    def test_mutation_surface(self):
        """Test add, remove and clear of features."""
        feature_filter = FeatureFilter()
        feature_filter.add_feature("安靜")
        feature_filter.add_feature("安靜")
        feature_filter.add_feature("有插座")

        assert feature_filter.features == ["安靜", "有插座"]
        assert feature_filter.feature_count == 2
        assert "安靜" in feature_filter

        feature_filter.remove_feature("安靜")
        assert feature_filter.features == ["有插座"]
        assert feature_filter.contains_feature("有插座")

        feature_filter.clear_features()
        assert feature_filter.is_empty()

    def test_description(self):
        """Test description includes features and mode."""
        assert FeatureFilter().description == "Feature filter (unrestricted)"
        assert FeatureFilter(["安靜"]).description == "Feature filter (安靜) [match all]"
        assert (
            FeatureFilter(["安靜", "明亮"], match_all=False).description
            == "Feature filter (安靜, 明亮) [match any]"
        )

    def test_catalog_helpers(self):
        """Test catalog lookups."""
        assert FeatureFilter.is_valid_feature("有wifi")
        assert not FeatureFilter.is_valid_feature("有停車場")
        assert len(FeatureFilter.all_valid_features()) == 12
        assert "有插座" in FeatureFilter.features_by_category("Facility")
        assert FeatureFilter.features_by_category("unknown") == ()
        assert FeatureFilter.features_by_category("") == ()

    def test_equality_and_hash(self):
        """Test equality compares the ordered features and match mode."""
        assert FeatureFilter(["安靜", "明亮"]) == FeatureFilter(["安靜", "明亮"])
        assert FeatureFilter(["安靜", "明亮"]) != FeatureFilter(["明亮", "安靜"])
        assert FeatureFilter(["安靜"]) != FeatureFilter(["安靜"], match_all=False)
        assert hash(FeatureFilter(["安靜"])) == hash(FeatureFilter("安靜"))
        assert len({FeatureFilter(["安靜"]), FeatureFilter(["安靜"]), FeatureFilter(["明亮"])}) == 2

    def test_copy_is_independent(self):
        """Test copying keeps features and mode."""
        original = FeatureFilter(["安靜"], match_all=False)
        clone = original.copy()
        clone.add_feature("明亮")

        assert original.features == ["安靜"]
        assert clone.match_all is False

    def test_statistics_include_mode(self, ranked_results):
        """Test statistics record criteria and match mode."""
        feature_filter = FeatureFilter(["不限時", "有插座"])
        filtered = feature_filter.filter(ranked_results)

        stats = feature_filter.statistics(ranked_results, filtered)

        assert stats.filtered_count == 3
        assert stats.criteria == ("不限時", "有插座")
        assert stats.mode == "match all"


class TestRatingFilter:
    """Test rating range filtering."""

    def test_minimum_rating(self, ranked_results):
        """Test a lower bound keeps records rated at or above it."""
        filtered = RatingFilter.at_least(4.3).filter(ranked_results)

        assert ids(filtered) == ["cafe_001", "cafe_003", "cafe_009", "cafe_010"]

    def test_rating_range(self, ranked_results):
        """Test both bounds are inclusive."""
        filtered = RatingFilter(4.0, 4.3).filter(ranked_results)

        assert ids(filtered) == ["cafe_010", "cafe_002", "cafe_005", "cafe_008"]

    def test_maximum_only(self, ranked_results):
        """Test an upper bound alone."""
        assert ids(RatingFilter(max_rating=3.5).filter(ranked_results)) == ["cafe_007", "cafe_006"]

    def test_unrated_records_excluded(self, make_record):
        """Test records without a rating never pass a configured filter."""
        records = [make_record("rated", rating=4.0), make_record("unrated")]

        assert ids(RatingFilter(0.0).filter(records)) == ["rated"]

    def test_unconfigured_is_identity(self, ranked_results):
        """Test no bounds passes everything."""
        rating_filter = RatingFilter()

        assert rating_filter.is_empty()
        assert rating_filter.filter(ranked_results) == ranked_results
        assert rating_filter.filter(None) == []

    def test_invalid_bounds(self):
        """Test out-of-range and inverted bounds are rejected."""
        with pytest.raises(ValueError):
            RatingFilter(min_rating=6.0)
        with pytest.raises(ValueError):
            RatingFilter(min_rating=4.5, max_rating=3.0)

    def test_description_and_statistics(self, ranked_results):
        """Test description and statistics list the active bounds."""
        rating_filter = RatingFilter(4.0, 4.5)
        filtered = rating_filter.filter(ranked_results)

        assert rating_filter.description == "Rating filter (>= 4.0, <= 4.5)"
        assert RatingFilter().description == "Rating filter (unrestricted)"
        assert rating_filter.statistics(ranked_results, filtered).criteria == (">= 4.0", "<= 4.5")

    def test_set_range_and_clear(self):
        """Test bounds can be replaced and cleared."""
        rating_filter = RatingFilter(4.0)
        rating_filter.set_range(3.0, 4.0)

        assert (rating_filter.min_rating, rating_filter.max_rating) == (3.0, 4.0)

        rating_filter.clear()
        assert rating_filter.is_empty()

    def test_equality_and_hash(self):
        """Test equal bounds compare and hash alike."""
        assert RatingFilter(4.0) == RatingFilter(4.0).copy()
        assert RatingFilter(4.0) != RatingFilter(4.0, 5.0)
        assert len({RatingFilter(4.0), RatingFilter(4.0)}) == 1


class TestTagFilter:
    """Test hashtag filtering."""

    @pytest.fixture
    def tagged(self, make_record):
        return [
            make_record("a", tags=["#手沖", "#甜點"]),
            make_record("b", tags=["#手沖"]),
            make_record("c", tags=["#早午餐"]),
            make_record("d"),
        ]

    def test_match_all(self, tagged):
        """Test match-all keeps records carrying every tag."""
        assert ids(TagFilter(["#手沖", "#甜點"]).filter(tagged)) == ["a"]

    def test_match_any(self, tagged):
        """Test match-any keeps records sharing one tag."""
        tag_filter = TagFilter(["#甜點", "#早午餐"], match_all=False)

        assert ids(tag_filter.filter(tagged)) == ["a", "c"]

    def test_reads_tags_not_features(self, make_record):
        """Test features are ignored by a tag filter."""
        records = [make_record("x", features=["安靜"])]

        assert TagFilter("安靜").filter(records) == []
        assert FeatureFilter("安靜").filter(records) == records

    def test_unconfigured_is_identity(self, tagged):
        """Test no tags passes everything."""
        assert TagFilter().filter(tagged) == tagged

    def test_tag_surface(self, tagged):
        """Test tag accessors and diagnostics."""
        tag_filter = TagFilter()
        tag_filter.add_tag("#手沖")
        tag_filter.tags = ["#手沖", "#甜點"]
        tag_filter.remove_tag("#甜點")

        assert tag_filter.tags == ["#手沖"]
        assert tag_filter.get_missing_features(tagged[2]) == ["#手沖"]
        assert tag_filter.description == "Tag filter (#手沖) [match all]"

    def test_not_equal_to_feature_filter(self):
        """Test a tag filter never equals a feature filter with the same terms."""
        assert TagFilter("安靜") != FeatureFilter("安靜")
        assert TagFilter("安靜") == TagFilter("安靜").copy()
        assert isinstance(TagFilter("安靜").copy(), TagFilter)


class TestFilterStatistics:
    """Test retention statistics value object."""

    def test_retention_rate(self):
        """Test percentages and the empty case."""
        assert retention_rate(10, 5) == 50.0
        assert retention_rate(0, 0) == 0.0

    def test_invalid_counts(self):
        """Test filtered count cannot exceed original count."""
        with pytest.raises(ValueError):
            FilterStatistics(label="x", original_count=1, filtered_count=2)
        with pytest.raises(ValueError):
            FilterStatistics(label="x", original_count=-1, filtered_count=0)

    def test_dict_conversion(self):
        """Test to_dict and from_dict preserve the statistics."""
        stats = FilterStatistics(
            label="Feature filter",
            original_count=8,
            filtered_count=2,
            criteria=("安靜",),
            mode="match any",
        )

        data = stats.to_dict()

        assert data["removed_count"] == 6
        assert data["retention"] == 25.0
        assert FilterStatistics.from_dict(data) == stats

    def test_report(self):
        """Test the report lists counts, criteria and mode."""
        stats = FilterStatistics(
            label="District filter",
            original_count=4,
            filtered_count=1,
            criteria=("大安區", "中山區"),
        )

        report = stats.to_report()

        assert report.startswith("District filter statistics:")
        assert "retention: 25.0%" in report
        assert "criteria: 大安區, 中山區" in report
        assert "mode" not in report
