from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
import logging

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()


def configure_logging(app):
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    app.logger.setLevel(level)
    logging.getLogger('messagely').setLevel(level)


def create_app(config=None):
    """Build the application.

    ``config`` is a config class, or a mapping of overrides applied on top of
    :class:`messagely.config.Config`.
    """
    app = Flask(__name__)

    from messagely.config import Config
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from messagely import models  # noqa: F401  registers tables on db.metadata
    from messagely.errors import register_error_handlers
    from messagely.middleware import authenticate_jwt
    from messagely.routes import auth_bp, users_bp, messages_bp

    app.before_request(authenticate_jwt)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(messages_bp, url_prefix='/messages')
    register_error_handlers(app, db)

    CORS(app)

    @app.route('/')
    def health():
        return jsonify({"status": "ok"})

    @app.cli.command('init-db')
    def init_db():
        """Create all database tables."""
        db.create_all()
        app.logger.info("Created tables in %s", app.config['SQLALCHEMY_DATABASE_URI'])

    return app
