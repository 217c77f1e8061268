"""Tests for script version ordering."""

import random

import pytest

from sqlshift.core.version import (
    Ordering,
    compare_versions,
    later_version,
    pad_version,
    split_version,
    version_after,
    version_after_or_equal,
    version_sort_key,
)

NAMES = [
    "v1.1.3.4.sql",
    "v2.0.3.sql",
    "v2",
    "v1.2.3",
    "2.1",
    "1",
    "v0.0.1.sql",
    "v0.0.10.sql",
    "v0.0.2_add_users.sql",
    "readme.sql",
    "init.sql",
]


class TestSplitVersion:
    """Tests for split_version()."""

    def test_strips_marker_and_extension(self):
        assert split_version("v1.1.3.4.sql") == ["1", "1", "3", "4"]

    def test_strips_leading_path(self):
        assert split_version("schema/svc/v0.0.2.sql") == ["0", "0", "2"]

    def test_bare_numbers(self):
        assert split_version("2.1") == ["2", "1"]

    def test_descriptive_suffix_ignored(self):
        assert split_version("v0.0.2_add_users.sql") == ["0", "0", "2"]

    def test_uppercase_marker(self):
        assert split_version("V3.SQL") == ["3"]

    def test_no_version(self):
        assert split_version("readme.sql") == []


class TestPadVersion:
    """Tests for pad_version()."""

    def test_pads_with_zeros(self):
        assert pad_version(["1"], 3) == ["1", "0", "0"]

    def test_longer_is_unchanged(self):
        assert pad_version(["1", "2", "3"], 2) == ["1", "2", "3"]

    def test_does_not_mutate_input(self):
        parts = ["1"]
        pad_version(parts, 3)
        assert parts == ["1"]


class TestCompareVersions:
    """Tests for compare_versions()."""

    def test_first_component_decides(self):
        assert compare_versions("v1.1.3.4.sql", "v2.0.3.sql") is Ordering.BEFORE

    def test_shorter_version_is_zero_padded(self):
        assert compare_versions("v2", "v1.2.3") is Ordering.AFTER

    def test_bare_numbers(self):
        assert compare_versions("2.1", "1") is Ordering.AFTER

    def test_numeric_not_lexical(self):
        assert compare_versions("v0.0.10.sql", "v0.0.9.sql") is Ordering.AFTER

    def test_trailing_zeros_are_equal(self):
        assert compare_versions("v2", "v2.0.0.sql") is Ordering.EQUAL

    def test_falls_back_to_raw_names(self):
        assert compare_versions("init.sql", "v1.sql") is Ordering.BEFORE
        assert compare_versions("readme.sql", "init.sql") is Ordering.AFTER

    @pytest.mark.parametrize("name", NAMES)
    def test_reflexive(self, name):
        assert compare_versions(name, name) is Ordering.EQUAL

    def test_antisymmetric(self):
        for a in NAMES:
            for b in NAMES:
                assert compare_versions(a, b) is compare_versions(b, a).inverse()

    def test_stable_between_calls(self):
        results = {compare_versions("v1.10", "v1.9") for _ in range(5)}
        assert results == {Ordering.AFTER}


class TestHelpers:
    """Tests for boolean helpers and sort key."""

    def test_version_after(self):
        assert version_after("v0.0.2.sql", "v0.0.1.sql")
        assert not version_after("v0.0.1.sql", "v0.0.1.sql")

    def test_version_after_or_equal(self):
        assert version_after_or_equal("v0.0.1.sql", "v0.0.1")
        assert not version_after_or_equal("v0.0.1.sql", "v0.0.2.sql")

    def test_later_version(self):
        assert later_version("v0.0.2.sql", "v0.0.3") == "v0.0.3"
        assert later_version("v0.0.4.sql", "v0.0.3") == "v0.0.4.sql"
        assert later_version(None, "v1") == "v1"
        assert later_version("v1.sql", None) == "v1.sql"
        assert later_version(None, None) is None

    def test_later_version_prefers_first_on_tie(self):
        assert later_version("v1.sql", "v1") == "v1.sql"

    def test_sort_key_orders_by_version(self):
        names = ["v0.0.3.sql", "v0.0.1.sql", "v0.0.10.sql", "v0.0.2.sql"]
        random.Random(7).shuffle(names)
        assert sorted(names, key=version_sort_key) == [
            "v0.0.1.sql",
            "v0.0.2.sql",
            "v0.0.3.sql",
            "v0.0.10.sql",
        ]

    def test_sort_key_breaks_ties_by_name(self):
        names = ["v1.0.sql", "v1.sql"]
        assert sorted(names, key=version_sort_key) == ["v1.0.sql", "v1.sql"]
        assert sorted(reversed(names), key=version_sort_key) == ["v1.0.sql", "v1.sql"]

    def test_mixed_names_form_a_cycle(self):
        """Raw-name fallback is not transitive across numeric and plain names.

        Sorting such a mix has no consistent order, so script directories
        should not combine versioned and unversioned names.
        """
        assert compare_versions("v9.sql", "10.sql") is Ordering.BEFORE
        assert compare_versions("10.sql", "init.sql") is Ordering.BEFORE
        assert compare_versions("init.sql", "v9.sql") is Ordering.BEFORE
