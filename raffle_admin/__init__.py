"""Flask application package for the raffle administration service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied on top of the environment's config
            class (tests pass ``DATABASE_URL`` and friends here).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from raffle_admin.config import get_config
    from raffle_admin.db import init_db
    from raffle_admin.error_handlers import register_error_handlers
    from raffle_admin.logging_config import configure_logging
    from raffle_admin.routes.auth import auth_bp
    from raffle_admin.routes.dashboard import dashboard_bp
    from raffle_admin.routes.health import health_bp
    from raffle_admin.routes.raffles import raffles_bp
    from raffle_admin.routes.tickets import tickets_bp
    from raffle_admin.services.bootstrap_service import seed_defaults

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(raffles_bp, url_prefix="/api/raffles")
    app.register_blueprint(tickets_bp, url_prefix="/api/tickets")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")

    if app.config.get("SEED_ON_STARTUP"):
        with app.extensions["session_factory"].begin() as session:
            seed_defaults(
                session,
                admin_username=app.config["DEFAULT_ADMIN_USERNAME"],
                admin_password=app.config["DEFAULT_ADMIN_PASSWORD"],
                lottery_reference=app.config["DEFAULT_LOTTERY_REFERENCE"],
            )

    return app
