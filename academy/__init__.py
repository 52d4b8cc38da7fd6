import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from marshmallow import ValidationError

from academy.config import config
from academy.errors import AcademyError
from academy.extensions import db, ma, jwt, migrate, socketio


def configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("academy").setLevel(level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"msg": "Validation failed", "success": False, "errors": error.messages}), 400

    @app.errorhandler(AcademyError)
    def handle_academy_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({"msg": "Not found", "success": False}), 404


def create_app(config_name=None):
    app = Flask(__name__)
    config_name = config_name or os.getenv("APP_CONFIG", "default")
    app.config.from_object(config[config_name])

    configure_logging(app)

    # extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    }})
    socketio.init_app(app, async_mode=app.config["SOCKETIO_ASYNC_MODE"])

    register_error_handlers(app)

    # models and socket handlers register on import
    from academy import models, realtime  # noqa: F401
    from academy.routes.coaches import coaches_bp
    from academy.routes.students import students_bp
    from academy.routes.groups import groups_bp
    from academy.commands import register_commands

    app.register_blueprint(coaches_bp, url_prefix="/api/coaches")
    app.register_blueprint(students_bp, url_prefix="/api/students")
    app.register_blueprint(groups_bp, url_prefix="/api/groups")
    register_commands(app)

    return app
