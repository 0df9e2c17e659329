"""Tests for requirement parsing and matching."""

import pytest

from core.exceptions import UnsupportedRequirement
from core.requirement import (
    Op,
    PartialVersion,
    Requirement,
    Unsupported,
    admits,
    parse,
    parse_requirement,
)
from core.version import Version, parse_version


def matches(requirement: str, version: str) -> bool:
    return admits(parse_requirement(requirement), parse_version(version))


class TestParseRequirement:
    """Test parsing requirement text into operator and partial version."""

    def test_bare_version_is_caret(self):
        assert parse_requirement("1.2.3") == Requirement(Op.CARET, PartialVersion(1, 2, 3))

    def test_operators(self):
        assert parse_requirement("^1.2").op is Op.CARET
        assert parse_requirement("~1.2").op is Op.TILDE
        assert parse_requirement("=1.2.3").op is Op.EXACT
        assert parse_requirement("==1.2.3").op is Op.EQUAL
        assert parse_requirement(">=1").op is Op.GREATER_EQ
        assert parse_requirement(">1").op is Op.GREATER
        assert parse_requirement("<=1").op is Op.LESS_EQ
        assert parse_requirement("<1").op is Op.LESS

    def test_space_after_operator(self):
        assert parse_requirement(">= 1.2") == Requirement(Op.GREATER_EQ, PartialVersion(1, 2))

    def test_partial_components_stay_unset(self):
        requirement = parse_requirement("~1.2")
        assert requirement.version == PartialVersion(1, 2, None)

    def test_wildcards(self):
        assert parse_requirement("*") == Requirement(Op.WILDCARD, PartialVersion(None))
        assert parse_requirement("1.*") == Requirement(Op.WILDCARD, PartialVersion(1))
        assert parse_requirement("1.2.x") == Requirement(Op.WILDCARD, PartialVersion(1, 2))
        assert parse_requirement("=1.2.*").op is Op.WILDCARD

    def test_prerelease(self):
        requirement = parse_requirement("^1.0.0-beta.2")
        assert requirement.version.prerelease == ("beta", "2")

    def test_str(self):
        assert str(parse_requirement("1.2")) == "^1.2"
        assert str(parse_requirement("~0.3.1")) == "~0.3.1"
        assert str(parse_requirement("1.*")) == "1.*"
        assert str(parse_requirement("*")) == "*"

    @pytest.mark.parametrize(
        "text",
        [
            ">=1.0, <2.0",
            ">=1.0 <2.0",
            "^1 || ^2",
            "1.0.0 - 2.0.0",
            "",
            "latest",
            "^1.*",
            "1.*.3",
            "1.2-beta",
            "~>1.2",
        ],
    )
    def test_unsupported(self, text):
        """Should return Unsupported rather than raising."""
        result = parse_requirement(text)
        assert isinstance(result, Unsupported)
        assert result.text == text
        assert result.reason

    def test_strict_parse_raises(self):
        with pytest.raises(UnsupportedRequirement):
            parse(">=1.0, <2.0")


class TestAdmits:
    """Test whether versions satisfy requirements."""

    def test_caret(self):
        assert matches("^1.2.3", "1.2.3")
        assert matches("^1.2.3", "1.9.0")
        assert not matches("^1.2.3", "2.0.0")
        assert not matches("^1.2.3", "1.2.2")

    def test_caret_zero_major(self):
        assert matches("^0.2.3", "0.2.9")
        assert not matches("^0.2.3", "0.3.0")

    def test_caret_zero_minor(self):
        assert matches("^0.0.3", "0.0.3")
        assert not matches("^0.0.3", "0.0.4")
        assert matches("^0.0", "0.0.7")
        assert not matches("^0.0", "0.1.0")
        assert matches("^0", "0.9.0")
        assert not matches("^0", "1.0.0")

    def test_tilde(self):
        assert matches("~1.2", "1.2.99")
        assert not matches("~1.2", "1.3.0")
        assert matches("~1.2.3", "1.2.5")
        assert not matches("~1.2.3", "1.2.2")
        assert matches("~1", "1.9.0")
        assert not matches("~1", "2.0.0")

    def test_exact(self):
        assert matches("=1.2.3", "1.2.3")
        assert not matches("=1.2.3", "1.2.4")
        assert matches("=1.2", "1.2.9")
        assert not matches("=1.2", "1.3.0")
        assert matches("==1", "1.5.0")

    def test_wildcard(self):
        assert matches("*", "0.0.1")
        assert matches("1.2.*", "1.2.7")
        assert not matches("1.2.*", "1.3.0")
        assert matches("1.*", "1.99.0")
        assert not matches("1.*", "2.0.0")

    def test_comparators(self):
        assert matches(">=1.2", "1.2.0")
        assert not matches(">=1.2", "1.1.9")
        assert not matches(">1.2.3", "1.2.3")
        assert matches(">1.2.3", "1.2.4")
        assert not matches(">1.2", "1.2.9")
        assert matches(">1.2", "1.3.0")
        assert matches("<1.2", "1.1.9")
        assert not matches("<1.2", "1.2.0")
        assert matches("<=1.2", "1.2.9")
        assert not matches("<=1.2", "1.3.0")
        assert matches("<=1.2.3", "1.2.3")

    def test_prerelease_requires_same_release(self):
        """A pre-release only satisfies requirements naming the same release."""
        assert not matches("^1.0.0", "1.1.0-alpha")
        assert matches("^1.0.0-alpha", "1.0.0-beta")
        assert not matches("^1.0.0-alpha", "1.0.1-beta")
        assert matches("^1.0.0-alpha", "1.0.5")

    def test_unsupported_admits_nothing(self):
        assert not admits(Unsupported(text=">=1, <2", reason="multiple comparators"), Version(1, 5, 0))
