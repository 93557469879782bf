from unittest.mock import Mock

import pytest

from switchyard import PathRouter, Request, Route, RouteNotFoundError, RouteResult


@pytest.fixture
def router() -> PathRouter:
    router = PathRouter()
    router.add_route(Route("/users", Mock(), ["GET"], name="users.list"))
    router.add_route(Route("/users", Mock(), ["POST"], name="users.create"))
    router.add_route(Route("/users/{id:\\d+}", Mock(), ["GET"], name="users.show"))
    router.add_route(Route("/files/{name}", Mock()))
    return router


def test_matches_route_and_extracts_params(router):
    result = router.match(Request("GET", "/users/42"))

    assert result.is_success
    assert result.matched_route_name == "users.show"
    assert result.matched_params == {"id": "42"}


def test_placeholder_patterns_constrain_matches(router):
    result = router.match(Request("GET", "/users/abc"))

    assert result.is_failure
    assert not result.is_method_failure
    assert result.allowed_methods is None


def test_method_failure_lists_allowed_methods(router):
    result = router.match(Request("DELETE", "/users"))

    assert result.is_method_failure
    assert result.allowed_methods == ["GET", "POST"]


def test_routes_without_methods_allow_any(router):
    result = router.match(Request("PATCH", "/files/report.pdf"))

    assert result.is_success
    assert result.matched_params == {"name": "report.pdf"}


def test_ignores_query_string(router):
    assert router.match(Request("POST", "/users?page=2")).matched_route_name == "users.create"


def test_generate_uri(router):
    assert router.generate_uri("users.show", id=7) == "/users/7"


def test_generate_uri_for_unknown_route(router):
    with pytest.raises(RouteNotFoundError):
        router.generate_uri("nope")


def test_default_route_names():
    assert Route("/a", Mock()).name == "/a"
    assert Route("/a", Mock(), ["post", "GET"]).name == "/a^GET:POST"


def test_route_overlap():
    any_method = Route("/a", Mock())
    get_only = Route("/a", Mock(), ["GET"])
    post_only = Route("/a", Mock(), ["POST"])

    assert any_method.overlaps(get_only)
    assert not get_only.overlaps(post_only)
    assert not get_only.overlaps(Route("/b", Mock(), ["GET"]))


def test_route_result_from_route_failure_with_empty_methods():
    result = RouteResult.from_route_failure([])

    assert result.is_method_failure
    assert result.allowed_methods == []
