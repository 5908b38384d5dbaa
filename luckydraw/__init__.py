"""Live prize-draw server (Flask application package)."""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: dict[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied after the environment config
            (tests point ``DATA_DIR`` at a temp directory this way).

    Returns:
        Configured Flask application with the display WebSocket mounted
        at ``/<WS_PATH>``.
    """
    load_dotenv()

    from luckydraw.config import get_config
    from luckydraw.error_handlers import register_error_handlers
    from luckydraw.logging_config import configure_logging
    from luckydraw.routes.control import control_bp
    from luckydraw.routes.draw import draw_bp
    from luckydraw.routes.health import health_bp
    from luckydraw.routes.pool import pool_bp
    from luckydraw.routes.prizes import prizes_bp
    from luckydraw.routes.register import register_bp
    from luckydraw.routes.rounds import rounds_bp
    from luckydraw.routes.settings import settings_bp
    from luckydraw.runtime import init_runtime
    from luckydraw.sockets import init_push_channel

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    runtime = init_runtime(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(rounds_bp, url_prefix="/api/admin")
    app.register_blueprint(prizes_bp, url_prefix="/api/admin")
    app.register_blueprint(pool_bp, url_prefix="/api/admin")
    app.register_blueprint(settings_bp, url_prefix="/api/admin")
    app.register_blueprint(register_bp, url_prefix="/api")
    app.register_blueprint(control_bp, url_prefix="/api")
    app.register_blueprint(draw_bp, url_prefix="/api")

    init_push_channel(app, runtime)

    return app
