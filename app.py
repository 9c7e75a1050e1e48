import logging
import os

from config import config
from flask import Flask, jsonify
from flask_cors import CORS
from flask_login import LoginManager
from flask_migrate import Migrate


def create_app(config_name=None):
    """Application factory pattern"""
    if config_name is None:
        config_name = os.getenv("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize CORS for the frontend
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")

    CORS(
        app,
        resources={r"/api/*": {"origins": ALLOWED_ORIGINS}},
        supports_credentials=True,
        expose_headers=["x-cache-hit", "x-cache-key"],
    )

    # Initialize SQLAlchemy
    from models import db

    db.init_app(app)

    # Initialize Flask-Migrate
    Migrate(app, db)

    # Initialize Flask-Login
    login_manager = LoginManager()
    login_manager.init_app(app)

    # Import all models to ensure they are registered with SQLAlchemy
    from models.history_translation import HistoryTranslation  # noqa: F401
    from models.language import Language  # noqa: F401
    from models.saved_translation import SavedTranslation  # noqa: F401
    from models.slang_term import SlangTerm  # noqa: F401
    from models.translation import Translation  # noqa: F401
    from models.translation_cache import TranslationCache  # noqa: F401
    from models.user import User

    # User loader callback for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    # Bearer ID tokens authenticate API clients without a session cookie
    @login_manager.request_loader
    def load_user_from_request(request):
        from auth.utils import load_user_from_request as resolve_bearer_user

        return resolve_bearer_user(request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "error": "Not authenticated"}), 401

    # Register auth blueprint
    from auth.oauth import bp as oauth_bp

    app.register_blueprint(oauth_bp)

    # Register API blueprints
    from routes.api import bp as api_bp
    from routes.cache import bp as cache_bp
    from routes.contact import bp as contact_bp
    from routes.slang import bp as slang_bp
    from routes.translation import bp as translation_bp
    from routes.user_translations import bp as user_translations_bp
    from routes.voice import bp as voice_bp

    app.register_blueprint(api_bp)
    app.register_blueprint(translation_bp)
    app.register_blueprint(user_translations_bp)
    app.register_blueprint(cache_bp)
    app.register_blueprint(voice_bp)
    app.register_blueprint(slang_bp)
    app.register_blueprint(contact_bp)

    # Home route
    @app.route("/")
    def home():
        return jsonify({"message": "Welcome to Slango!", "version": "1.0.0"})

    # Health check route
    @app.route("/health")
    def health_check():
        try:
            db.session.execute(db.text("SELECT 1"))
            return jsonify({"status": "healthy", "database": "connected"}), 200
        except Exception as e:
            app.logger.error(f"Health check failed: {e}")
            return jsonify({"status": "unhealthy", "error": str(e)}), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, port=5001)
