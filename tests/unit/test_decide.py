"""Tests for update decision rules."""

import pytest

from core.decide import decide, is_eligible, is_selected, normalize_version, parse_version
from core.errors import InvalidVersionError
from core.models import CheckOptions, DependencySpec, UpdateDecision


class TestNormalizeVersion:
    """Test specifier normalization."""

    @pytest.mark.parametrize("specifier", ["1.2.3", "0.0.1", "10.0.0-beta.1", "4.x"])
    def test_digit_prefixed_is_unchanged(self, specifier):
        assert normalize_version(specifier, "9.9.9") == specifier

    @pytest.mark.parametrize(
        "specifier,expected",
        [
            ("^4.17.0", "4.17.0"),
            ("~1.2.3", "1.2.3"),
            ("v2.0.0", "2.0.0"),
            (">=1.2.3", "=1.2.3"),
            ("~>1.0.0", ">1.0.0"),
        ],
    )
    def test_strips_exactly_one_character(self, specifier, expected):
        assert normalize_version(specifier, "9.9.9") == expected

    def test_latest_becomes_fetched_version(self):
        assert normalize_version("latest", "18.2.0") == "18.2.0"

    def test_empty_specifier(self):
        assert normalize_version("", "1.0.0") == ""


class TestSelection:
    """Test which dependencies get looked up."""

    def test_default_skips_latest(self):
        assert not is_selected("latest", CheckOptions())
        assert is_selected("^1.0.0", CheckOptions())

    def test_latest_mode_includes_latest(self):
        assert is_selected("latest", CheckOptions(latest=True))

    def test_show_all_includes_latest(self):
        assert is_selected("latest", CheckOptions(show_all=True))


class TestEligibility:
    """Test eligibility rules."""

    def test_newer_version_is_eligible(self):
        assert is_eligible("4.17.0", "4.17.21", CheckOptions())

    def test_same_version_is_not_eligible(self):
        assert not is_eligible("4.17.21", "4.17.21", CheckOptions())

    def test_older_registry_version_is_not_eligible(self):
        assert not is_eligible("2.0.0", "1.9.0", CheckOptions())

    def test_precedence_is_numeric(self):
        assert is_eligible("1.9.0", "1.10.0", CheckOptions())

    def test_show_all_is_always_eligible(self):
        assert is_eligible("2.0.0", "1.0.0", CheckOptions(show_all=True))

    def test_latest_mode_with_equal_versions(self):
        assert is_eligible("18.2.0", "18.2.0", CheckOptions(latest=True))

    def test_leading_equals_is_tolerated(self):
        assert parse_version("=1.2.3") == parse_version("1.2.3")
        assert is_eligible("=1.2.3", "1.3.0", CheckOptions())

    @pytest.mark.parametrize("latest", ["5.0.0-next.3", "1.0.0-canary.abc123", "2.0.0-alpha.beta"])
    def test_prerelease_identifiers_with_words(self, latest):
        assert is_eligible("0.9.0", latest, CheckOptions())

    def test_prerelease_sorts_below_release(self):
        assert not is_eligible("5.0.0", "5.0.0-next.3", CheckOptions())
        assert is_eligible("2.0.0-alpha.1", "2.0.0-alpha.beta", CheckOptions())

    def test_build_metadata_is_ignored(self):
        assert not is_eligible("1.0.0", "1.0.0+build.1", CheckOptions())

    def test_invalid_version_raises(self):
        with pytest.raises(InvalidVersionError):
            is_eligible(">1.0.0", "2.0.0", CheckOptions())


class TestDecide:
    """Test decision construction."""

    def test_lodash_caret_range(self):
        spec = DependencySpec(name="lodash", specifier="^4.17.0")
        decision = decide(spec, "4.17.21", CheckOptions())
        assert decision == UpdateDecision(
            name="lodash", current_version="4.17.0", latest_version="4.17.21"
        )

    def test_react_latest_default_mode(self):
        spec = DependencySpec(name="react", specifier="latest")
        assert decide(spec, "18.2.0", CheckOptions()) is None

    def test_react_latest_with_latest_mode(self):
        spec = DependencySpec(name="react", specifier="latest")
        decision = decide(spec, "18.2.0", CheckOptions(latest=True))
        assert decision == UpdateDecision(
            name="react", current_version="18.2.0", latest_version="18.2.0"
        )

    def test_group_is_carried(self):
        spec = DependencySpec(name="jest", specifier="29.0.0", group="devDependencies")
        decision = decide(spec, "29.7.0", CheckOptions())
        assert decision.group == "devDependencies"

    def test_next_tag_release(self):
        spec = DependencySpec(name="next", specifier="^1.0.0")
        decision = decide(spec, "5.0.0-next.3", CheckOptions())
        assert decision.latest_version == "5.0.0-next.3"

    def test_invalid_version_names_package(self):
        spec = DependencySpec(name="left-pad", specifier="*")
        with pytest.raises(InvalidVersionError, match="left-pad"):
            decide(spec, "1.3.0", CheckOptions())

    def test_show_all_accepts_uncomparable_specifier(self):
        spec = DependencySpec(name="left-pad", specifier="*")
        decision = decide(spec, "1.3.0", CheckOptions(show_all=True))
        assert decision.current_version == ""
