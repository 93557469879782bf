from types import MappingProxyType

import pytest

from switchyard import Application, ConfigurationError, DuplicateRouteError, PathRouter
from switchyard.config import ApplicationConfig, flatten_config
from switchyard.config_injection import inject_pipeline_from_config, inject_routes_from_config
from switchyard.middleware import PathMiddleware
from tests.fixtures.test_app import ExecutionTracker

COUNTING = "tests.fixtures.test_app.controllers.CountingController"


@pytest.fixture
def app(container) -> Application:
    return Application(PathRouter(), container)


def test_pipeline_is_piped_by_descending_priority(app):
    low, default, high = ExecutionTracker("low"), ExecutionTracker("default"), ExecutionTracker("high")

    inject_pipeline_from_config(
        app,
        {
            "middleware_pipeline": [
                {"middleware": low, "priority": -10},
                {"middleware": default},
                {"middleware": high, "priority": 100},
            ]
        },
    )

    assert list(app.pipeline) == [high, default, low]


def test_equal_priorities_keep_configured_order(app):
    first, second, third = ExecutionTracker("1"), ExecutionTracker("2"), ExecutionTracker("3")

    inject_pipeline_from_config(
        app,
        {
            "middleware_pipeline": [
                {"middleware": first, "priority": 5},
                {"middleware": second, "priority": 5},
                {"middleware": third, "priority": 5},
            ]
        },
    )

    assert list(app.pipeline) == [first, second, third]


def test_pipeline_entries_with_path_are_scoped(app, execution_tracker):
    inject_pipeline_from_config(
        app, {"middleware_pipeline": [{"middleware": execution_tracker, "path": "/api"}]}
    )

    (stage,) = list(app.pipeline)
    assert isinstance(stage, PathMiddleware)
    assert stage.prefix == "/api"
    assert stage.middleware is execution_tracker


def test_routes_are_registered_with_options(app):
    inject_routes_from_config(
        app,
        {
            "routes": [
                {
                    "path": "/users/{id}",
                    "middleware": f"{COUNTING}::show",
                    "allowed_methods": ["GET"],
                    "name": "user",
                    "options": {"defaults": {"id": "1"}},
                },
                {"path": "/health", "middleware": f"{COUNTING}::show"},
            ]
        },
    )

    user, health = app.routes
    assert user.name == "user"
    assert user.methods == {"GET"}
    assert user.options == {"defaults": {"id": "1"}}
    assert health.allows_any_method
    assert app.router.generate_uri("user", id=3) == "/users/3"


def test_accepts_validated_configuration(app):
    config = ApplicationConfig.from_mapping({"routes": [{"path": "/", "middleware": f"{COUNTING}::show"}]})

    inject_routes_from_config(app, config)

    assert len(app.routes) == 1


def test_missing_routes_are_ignored(app):
    inject_routes_from_config(app, {})

    assert app.routes == []


def test_duplicate_routes_propagate(app):
    route = {"path": "/users", "middleware": f"{COUNTING}::show", "allowed_methods": ["GET"]}

    with pytest.raises(DuplicateRouteError):
        inject_routes_from_config(app, {"routes": [route, dict(route)]})


@pytest.mark.parametrize(
    "config",
    [
        {"routes": [{"path": "/"}]},
        {"middleware_pipeline": [{"path": "/api"}]},
        {"middleware_pipeline": [{"middleware": "auth", "priority": "high"}]},
        {"app": {"programmatic_pipeline": "maybe"}},
    ],
)
def test_invalid_configuration_is_rejected(config):
    with pytest.raises(ConfigurationError):
        ApplicationConfig.from_mapping(config)


def test_unknown_keys_are_preserved():
    config = ApplicationConfig.from_mapping({"db": {"dsn": "sqlite://"}})

    assert config.model_extra == {"db": {"dsn": "sqlite://"}}


def test_flatten_config_accepts_mappings_and_models():
    assert flatten_config({"debug": True}) == {"debug": True}
    assert flatten_config(MappingProxyType({"debug": True})) == {"debug": True}
    assert flatten_config(ApplicationConfig(debug=True))["debug"] is True
    assert flatten_config(None) == {}
