import logging

from flask import Flask

from blogboard.config import Config
from blogboard.db import db
from blogboard.errors import register_error_handlers
from blogboard.extensions.extensions import ma


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    db.init_app(app)
    ma.init_app(app)

    from blogboard.routes.post_routes import post_bp
    from blogboard.routes.comment_routes import comment_bp

    app.register_blueprint(post_bp, url_prefix="/api/v1")
    app.register_blueprint(comment_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    with app.app_context():
        from blogboard import models  # noqa: F401
        db.create_all()

    return app
