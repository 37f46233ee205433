"""GoalTracker application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import CONFIG_MAP, BaseConfig

__version__ = "0.1.0"


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "goaltracker.blueprints.system"
    yield "goaltracker.blueprints.auth"
    yield "goaltracker.blueprints.goals"
    yield "goaltracker.blueprints.analytics"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["GOALTRACKER_CONFIG"] = config_obj
    app.json.sort_keys = False

    from .logging_config import setup_logging

    setup_logging(config_obj)

    from .errors import register_error_handlers
    from .extensions import init_storage

    register_error_handlers(app)
    init_storage(app)
    _register_blueprints(app)

    from . import cli

    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "create_app"]
