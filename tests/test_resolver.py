"""Tests for version comparison and constraint resolution."""

import pytest

from version_matrix._constraints import (
    Constraint,
    Operator,
    compare_versions,
    filter_versions,
    is_version_at_least,
    parse_major_minor,
    resolve_versions,
    same_major,
    same_major_minor,
    version_key,
)
from version_matrix.exceptions import (
    EmptyConstraintError,
    MalformedConstraintError,
    NoCandidatesError,
    NoConstraintsFoundError,
    NoMatchError,
)

CANDIDATES = ["3.9", "3.10", "3.11", "3.12", "3.13"]


class TestComparator:
    """Tests for major.minor comparison."""

    def test_numeric_not_lexical(self):
        assert compare_versions("3.9", "3.10") == -1
        assert compare_versions("3.10", "3.9") == 1
        assert sorted(["3.10", "3.9", "3.11"], key=version_key) == ["3.9", "3.10", "3.11"]

    def test_patch_is_ignored(self):
        assert compare_versions("3.10", "3.10.4") == 0
        assert parse_major_minor("3.12.1") == (3, 12)

    def test_major_dominates(self):
        assert compare_versions("4.0", "3.99") == 1

    def test_same_major(self):
        assert same_major("3.9", "3.13")
        assert not same_major("3.13", "4.0")

    def test_same_major_minor(self):
        assert same_major_minor("3.11", "3.11.5")
        assert not same_major_minor("3.11", "3.12")

    @pytest.mark.parametrize("bad", ["3", "three.ten", "", "3.x"])
    def test_malformed_raises_value_error(self, bad):
        with pytest.raises(ValueError):
            compare_versions(bad, "3.10")

    def test_is_version_at_least(self):
        assert is_version_at_least("3.9", "3.9")
        assert is_version_at_least("4.0", "3.9")
        assert not is_version_at_least("3.8", "3.9")

    def test_is_version_at_least_with_unparsable_input(self):
        assert not is_version_at_least("latest", "3.9")


class TestFilterVersions:
    """Tests for filter_versions."""

    def test_no_constraints_returns_everything(self):
        result = filter_versions(CANDIDATES, [])
        assert result == CANDIDATES
        assert result is not CANDIDATES

    def test_order_is_preserved(self):
        constraints = [Constraint(Operator.GE, "3.12")]
        assert filter_versions(["3.13", "3.12", "3.11"], constraints) == ["3.13", "3.12"]

    def test_constraints_are_combined_with_and(self):
        constraints = [Constraint(Operator.GT, "3.9"), Constraint(Operator.LE, "3.12"), Constraint(Operator.NE, "3.11")]
        assert filter_versions(CANDIDATES, constraints) == ["3.10", "3.12"]

    def test_compatible_release_operator(self):
        constraints = [Constraint(Operator.COMPATIBLE, "3.11")]
        assert filter_versions(["3.10", "3.11", "3.12"], constraints) == ["3.11"]

    def test_caret_operator(self):
        constraints = [Constraint(Operator.CARET, "3.11")]
        assert filter_versions(["3.10", "3.11", "3.13", "4.0", "4.1"], constraints) == ["3.11", "3.13"]


class TestResolveVersions:
    """Tests for resolve_versions."""

    @pytest.mark.parametrize(
        "requires_python,expected",
        [
            (">=3.10", ["3.10", "3.11", "3.12", "3.13"]),
            (">=3.10,<3.13", ["3.10", "3.11", "3.12"]),
            ("~=3.10", ["3.10"]),
            ("~=3.10.2", ["3.10"]),
            ("^3.11", ["3.11", "3.12", "3.13"]),
            ("==3.12.*", ["3.12"]),
            ("==3.11", ["3.11"]),
            (">3.9,!=3.11", ["3.10", "3.12", "3.13"]),
            (">=3.9.1,<3.13.0", ["3.9", "3.10", "3.11", "3.12"]),
            ("  >= 3.12 ,  ", ["3.12", "3.13"]),
        ],
    )
    def test_resolution(self, requires_python, expected):
        assert resolve_versions(requires_python, CANDIDATES) == expected

    def test_empty_constraint(self):
        with pytest.raises(EmptyConstraintError):
            resolve_versions("", CANDIDATES)

    def test_no_candidates(self):
        with pytest.raises(NoCandidatesError):
            resolve_versions(">=3.10", [])

    def test_no_candidates_is_checked_before_parsing(self):
        with pytest.raises(NoCandidatesError):
            resolve_versions("not a constraint", [])

    def test_malformed_constraint(self):
        with pytest.raises(MalformedConstraintError) as exc_info:
            resolve_versions(">=3", CANDIDATES)
        assert exc_info.value.segment == ">=3"

    def test_only_commas(self):
        with pytest.raises(NoConstraintsFoundError):
            resolve_versions(",,", CANDIDATES)

    def test_no_match(self):
        with pytest.raises(NoMatchError) as exc_info:
            resolve_versions(">=4.0", CANDIDATES)
        assert exc_info.value.constraint == ">=4.0"
        assert "no versions match the constraint '>=4.0'" in str(exc_info.value)
