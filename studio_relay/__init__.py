import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .config import RelayConfig, Settings, load_relay_config, load_settings
from .errors import register_error_handlers
from .gateway import GeminiClient
from .request_logging import register_request_logging
from .routes import ENDPOINT_SCHEMAS, routes


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[GeminiClient] = None,
    relay_config: Optional[RelayConfig] = None,
) -> Flask:
    settings = settings or load_settings()
    relay_config = relay_config or load_relay_config(settings.endpoints_path)
    missing = sorted(set(ENDPOINT_SCHEMAS) - set(relay_config.endpoints))
    if missing:
        raise RuntimeError(f"Endpoint configuration is missing: {', '.join(missing)}")

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length
    app.json.ensure_ascii = False
    app.extensions["settings"] = settings
    app.extensions["relay_config"] = relay_config
    app.extensions["gemini_client"] = client or GeminiClient.from_settings(settings)

    CORS(app)
    register_request_logging(app)
    register_error_handlers(app)
    app.logger.setLevel(logging.INFO)
    app.register_blueprint(routes)
    return app


__all__ = ["create_app"]
