from flask import Flask
from .config import Config
from .extensions import cors, db


def create_app(config_class: type[Config] = Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Extensions
    cors.init_app(app, origins=app.config.get("CORS_ORIGINS", "*"))
    db.init_app(app)

    # Blueprints
    from .routes.storage_api import bp as storage_api

    app.register_blueprint(storage_api, url_prefix="/api")

    return app
