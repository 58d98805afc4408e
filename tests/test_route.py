"""Tests for routes and route parsing."""

import pytest as _pytest

import yamlmigrate.errors as errors
import yamlmigrate.route as route_module

Route = route_module.Route


class TestFromString:
    """Parsing separator-delimited route strings."""

    def test_splits_on_separator(self) -> None:
        """Keys are split on the default separator."""
        assert Route.from_string("a.b.c") == Route.of("a", "b", "c")

    def test_custom_separator(self) -> None:
        """Any single character can separate keys."""
        assert Route.from_string("a/b.c", "/") == Route.of("a", "b.c")

    def test_escaped_separator_is_literal(self) -> None:
        """An escaped separator stays inside the key."""
        assert Route.from_string("a\\.b.c") == Route.of("a.b", "c")

    def test_escaped_escape_is_literal(self) -> None:
        """A doubled escape yields one escape character."""
        assert Route.from_string("a\\\\b") == Route.of("a\\b")

    def test_empty_segments_are_kept(self) -> None:
        """Empty segments become empty-string keys."""
        assert Route.from_string("a..b") == Route.of("a", "", "b")
        assert Route.from_string("") == Route.of("")

    def test_dangling_escape_rejected(self) -> None:
        """An escape at the end of the string is an error."""
        with _pytest.raises(errors.InvalidRouteError) as exc_info:
            Route.from_string("a\\")
        assert exc_info.value.route_string == "a\\"

    def test_escape_before_ordinary_character_rejected(self) -> None:
        """Only the separator and the escape itself can be escaped."""
        with _pytest.raises(errors.InvalidRouteError):
            Route.from_string("a\\x")

    def test_separator_equal_to_escape_rejected(self) -> None:
        """Separator and escape must differ."""
        with _pytest.raises(errors.InvalidRouteError):
            Route.from_string("a.b", ".", ".")

    def test_multi_character_separator_rejected(self) -> None:
        """Separators are single characters."""
        with _pytest.raises(errors.InvalidRouteError):
            Route.from_string("a::b", "::")


class TestToString:
    """Rendering routes back to strings."""

    def test_plain_keys(self) -> None:
        """Keys are joined with the separator."""
        assert Route.of("a", "b").to_string() == "a.b"

    def test_keys_with_separator_are_escaped(self) -> None:
        """Rendered strings parse back into the same route."""
        route = Route.of("a.b", "c\\d", "")
        assert Route.from_string(route.to_string()) == route

    def test_non_string_keys(self) -> None:
        """Non-string keys are rendered with str()."""
        assert str(Route.of("ports", 8080)) == "ports.8080"


class TestRouteOperations:
    """Navigation helpers on routes."""

    def test_add_returns_new_route(self) -> None:
        """add() does not modify the original route."""
        base = Route.of("a")
        assert base.add("b") == Route.of("a", "b")
        assert base == Route.of("a")

    def test_parent_and_last_key(self) -> None:
        """parent() drops the last key, last_key returns it."""
        route = Route.of("a", "b", "c")
        assert route.parent() == Route.of("a", "b")
        assert route.last_key == "c"

    def test_root_has_no_parent(self) -> None:
        """The empty route is the root and has no parent or last key."""
        root = Route()
        assert root.is_root
        with _pytest.raises(ValueError):
            root.parent()
        with _pytest.raises(ValueError):
            _ = root.last_key

    def test_starts_with(self) -> None:
        """A route starts with itself and with each ancestor."""
        route = Route.of("a", "b", "c")
        assert route.starts_with(Route.of("a", "b"))
        assert route.starts_with(route)
        assert route.starts_with(Route())
        assert not route.starts_with(Route.of("b"))

    def test_slicing_returns_route(self) -> None:
        """Slices are routes, indexes are keys."""
        route = Route.of("a", "b", "c")
        assert route[:2] == Route.of("a", "b")
        assert route[-1] == "c"
        assert len(route) == 3
        assert list(route) == ["a", "b", "c"]

    def test_usable_as_dict_key(self) -> None:
        """Structural hashing makes equal routes interchangeable keys."""
        table = {Route.of("a", "b"): 1}
        assert table[Route.from_string("a.b")] == 1

    def test_repr(self) -> None:
        """repr shows the keys."""
        assert repr(Route.of("a", 1)) == "Route('a', 1)"


class TestRouteFactory:
    """Factories bound to a separator."""

    def test_create_uses_bound_separator(self) -> None:
        """Strings are split with the factory's separator."""
        factory = route_module.RouteFactory("/")
        assert factory.create("a/b.c") == Route.of("a", "b.c")

    def test_invalid_delimiters_rejected_on_creation(self) -> None:
        """A factory cannot be built with unusable delimiters."""
        with _pytest.raises(errors.InvalidRouteError):
            route_module.RouteFactory("\\")

    def test_as_route_accepts_both_forms(self) -> None:
        """as_route passes routes through and parses strings."""
        route = Route.of("x")
        assert route_module.as_route(route) is route
        assert route_module.as_route("x.y") == Route.of("x", "y")
