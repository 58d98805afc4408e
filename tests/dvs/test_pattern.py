"""Tests for version patterns."""

import pytest as _pytest

import yamlmigrate.dvs as dvs
import yamlmigrate.errors as errors


@_pytest.fixture
def dotted() -> dvs.Pattern:
    """Pattern "major.minor" with major 1..100 and minor 0..10."""
    return dvs.Pattern((1, 100), ".", (0, 10))


class TestPatternConstruction:
    """Building patterns from parts."""

    def test_parts_are_coerced(self, dotted: dvs.Pattern) -> None:
        """Tuples become integer parts, strings literal parts."""
        assert dotted.parts == (dvs.IntegerPart(1, 100), dvs.LiteralPart("."), dvs.IntegerPart(0, 10))

    def test_parse_from_iterable(self, dotted: dvs.Pattern) -> None:
        """parse() is equivalent to the constructor."""
        assert dvs.Pattern.parse([(1, 100), ".", (0, 10)]) == dotted

    def test_min_greater_than_max_rejected(self) -> None:
        """Integer part bounds must be ordered."""
        with _pytest.raises(errors.InvalidPatternError):
            dvs.IntegerPart(5, 4)

    def test_negative_min_rejected(self) -> None:
        """Integer parts are non-negative."""
        with _pytest.raises(errors.InvalidPatternError):
            dvs.IntegerPart(-1, 4)

    def test_empty_literal_rejected(self) -> None:
        """Literal parts need text."""
        with _pytest.raises(errors.InvalidPatternError):
            dvs.Pattern((0, 1), "")

    def test_pattern_without_integer_part_rejected(self) -> None:
        """A pattern must contain at least one integer part."""
        with _pytest.raises(errors.InvalidPatternError):
            dvs.Pattern("v")

    def test_unsupported_part_rejected(self) -> None:
        """Parts must be parts, (min, max) tuples or strings."""
        with _pytest.raises(errors.InvalidPatternError):
            dvs.Pattern(3)

    def test_str(self, dotted: dvs.Pattern) -> None:
        """str() shows ranges and literals."""
        assert str(dotted) == "[1-100].[0-10]"


class TestGetVersion:
    """Matching id strings against a pattern."""

    def test_valid_id(self, dotted: dvs.Pattern) -> None:
        """A matching id decomposes into its integer values."""
        version = dotted.get_version("1.4")
        assert version is not None
        assert version.values == (1, 4)

    def test_out_of_range_part(self, dotted: dvs.Pattern) -> None:
        """Minor 11 in "1.11" is outside 0..10."""
        assert dotted.get_version("1.11") is None

    def test_leading_zero_rejected(self, dotted: dvs.Pattern) -> None:
        """Numbers are written without leading zeros."""
        assert dotted.get_version("01.4") is None
        assert dotted.get_version("1.04") is None

    def test_zero_is_allowed(self, dotted: dvs.Pattern) -> None:
        """A single "0" is a valid number."""
        version = dotted.get_version("3.0")
        assert version is not None
        assert version.values == (3, 0)

    def test_missing_literal(self, dotted: dvs.Pattern) -> None:
        """Every literal must be present."""
        assert dotted.get_version("14") is None

    def test_trailing_text(self, dotted: dvs.Pattern) -> None:
        """The whole string must be consumed."""
        assert dotted.get_version("1.4-beta") is None

    def test_none_and_empty(self, dotted: dvs.Pattern) -> None:
        """Absent or empty ids do not match."""
        assert dotted.get_version(None) is None
        assert dotted.get_version("") is None

    def test_greedy_integer_match(self) -> None:
        """Integer parts take the longest in-range number."""
        pattern = dvs.Pattern((0, 99), "b", (0, 9))
        version = pattern.get_version("12b3")
        assert version is not None
        assert version.values == (12, 3)

    def test_greedy_match_falls_back_to_shorter_number(self) -> None:
        """When the longest run is out of range a shorter prefix is tried."""
        pattern = dvs.Pattern((0, 20), (0, 9))
        version = pattern.get_version("95")
        assert version is not None
        assert version.values == (9, 5)

    def test_non_ascii_digits_rejected(self, dotted: dvs.Pattern) -> None:
        """Only ASCII digits form numbers."""
        assert dotted.get_version("1.٤") is None

    def test_version_of(self, dotted: dvs.Pattern) -> None:
        """version_of is the functional spelling of get_version."""
        assert dvs.version_of(dotted, "2.3") == dotted.get_version("2.3")


class TestOldestAndRender:
    """Oldest versions and id rendering."""

    def test_oldest_uses_minimums(self, dotted: dvs.Pattern) -> None:
        """Every integer part sits at its minimum."""
        assert dotted.oldest().as_id() == "1.0"

    def test_render(self, dotted: dvs.Pattern) -> None:
        """Values are interleaved with literals."""
        assert dotted.render((7, 2)) == "7.2"

    def test_rendered_id_parses_back(self, dotted: dvs.Pattern) -> None:
        """A version's id matches back to an equal version."""
        version = dotted.get_version("42.10")
        assert version is not None
        assert dotted.get_version(version.as_id()) == version
