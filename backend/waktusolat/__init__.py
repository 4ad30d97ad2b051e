import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

# Import extensions from the central extensions file
from .extensions import db, limiter, migrate, redis_client
import logging
from flask import Flask
from flask_cors import CORS
from flask_smorest import Api

# Declare extensions that are not in the extensions file
cors = CORS()
api = Api()  # Initialize Flask-Smorest API


def create_app(config_name):
    """
    Flask Application Factory function.
    """
    app = Flask(__name__,
                instance_relative_config=False)

    # 1. Load Config
    from .config import config_by_name
    config_obj = config_by_name.get(config_name, config_by_name['default'])
    app.config.from_object(config_obj)
    app.logger.info(f"App configured with: {config_obj.__name__}")

    # Flask-Smorest API documentation configuration
    app.config["API_TITLE"] = "Waktu Solat API"
    app.config["API_VERSION"] = "v2"
    app.config["OPENAPI_VERSION"] = "3.0.2"
    app.config["OPENAPI_URL_PREFIX"] = "/api/docs"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    # 2. Sentry SDK initialization - for error and performance tracking
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=1.0
        )
        app.logger.info("Sentry initialized for error tracking.")

    # 3. Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/*": {"origins": "*"}})
    limiter.init_app(app)
    redis_client.init_app(app)

    from .celery_utils import init_celery
    init_celery(app)

    # 4. Load the zone gazetteer once. It is read-only for the life of the process.
    from .services.gazetteer import load_gazetteer
    app.extensions['zone_gazetteer'] = load_gazetteer(
        app.config['ZONES_DATA_PATH'],
        app.config['BOUNDARY_DATA_PATH']
    )

    # 5. Initialize Flask-Smorest API
    api.init_app(app)

    # 6. Register Blueprints in app context
    with app.app_context():
        from . import models  # noqa: F401  (register tables with SQLAlchemy)
        from .routes.main_routes import main_bp
        from .routes.solat_routes import solat_bp
        from .routes.jadual_routes import jadual_bp
        from .routes.zone_routes import zone_bp

        api.register_blueprint(main_bp)
        api.register_blueprint(solat_bp)
        api.register_blueprint(jadual_bp)
        api.register_blueprint(zone_bp)

        _register_error_handlers(app)

        # 7. Set up Logging
        log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        app.logger.setLevel(log_level)

        app.logger.info(f"Application initialized with environment: {app.config.get('FLASK_ENV')}, Debug: {app.config.get('DEBUG')}")

    # 8. Finally, return the app
    return app


def _register_error_handlers(app):
    """Service errors that escape a route's own mapping are server faults."""
    from flask import jsonify
    from .errors import WaktuSolatError

    @app.errorhandler(WaktuSolatError)
    def handle_service_error(error):
        app.logger.error(f"Unhandled service error: {error}", exc_info=True)
        return jsonify({"message": "Internal Server Error"}), 500
