"""Tests for waypoint.routing.route — Route, RouteMatch, PathSegment."""

import pytest

from waypoint.routing.route import HTTP_METHODS, PathSegment, Route, RouteMatch
from waypoint.routing.router import parse_pattern


def _handler(request, params) -> str:
    return "ok"


def _route(pattern: str, method: str = "GET") -> Route:
    return Route(method=method, pattern=pattern, segments=parse_pattern(pattern), handler=_handler)


class TestPathSegment:
    def test_literal(self) -> None:
        seg = PathSegment(value="items")
        assert seg.is_param is False
        assert seg.param_name is None

    def test_placeholder(self) -> None:
        seg = PathSegment(value=":id", is_param=True, param_name="id")
        assert seg.is_param is True
        assert seg.param_name == "id"

    def test_frozen(self) -> None:
        seg = PathSegment(value="items")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestRoute:
    def test_creation(self) -> None:
        route = _route("/items/:id")
        assert route.method == "GET"
        assert route.pattern == "/items/:id"
        assert route.handler is _handler
        assert route.name is None

    def test_param_names(self) -> None:
        assert _route("/users/:user/posts/:post").param_names == ("user", "post")
        assert _route("/items").param_names == ()

    def test_frozen(self) -> None:
        route = _route("/")
        with pytest.raises(AttributeError):
            route.pattern = "/other"  # type: ignore[misc]

    def test_verbs(self) -> None:
        assert {"GET", "POST", "PUT", "PATCH", "DELETE"} <= HTTP_METHODS


class TestRouteMatch:
    def test_creation(self) -> None:
        route = _route("/items/:id")
        match = RouteMatch(route=route, path_params={"id": "42"})
        assert match.route is route
        assert match.path_params == {"id": "42"}

    def test_frozen(self) -> None:
        match = RouteMatch(route=_route("/"), path_params={})
        with pytest.raises(AttributeError):
            match.route = _route("/x")  # type: ignore[misc]
