"""
Términos Procesales API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support, configures
middleware and registers the statutory term calculation endpoints.
"""

import os
from typing import Any, Dict, Optional
from flask import jsonify
from flask_openapi3 import OpenAPI, Info, Tag
from observability.config import setup_observability
from observability.middleware import add_observability_middleware

from middleware.cors import configure_cors
from middleware.error_handler import ErrorHandlerMiddleware
from models.responses import HealthCheckResponse

SERVICE_MESSAGE = "Servidor de términos procesales activo"

# OpenAPI info
info = Info(
    title="Términos Procesales API",
    version=os.getenv('SERVICE_VERSION', '1.0.0'),
    description="Statutory deadlines for Colombian public-utility administrative and judicial actions"
)

health_tag = Tag(name="Health", description="System health and status")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> OpenAPI:
    """
    Create and configure the Flask application.

    Args:
        config_overrides: Values applied on top of the environment configuration

    Returns:
        Configured application
    """
    setup_observability()

    app = OpenAPI(__name__, info=info, doc_ui=_env_flag('DOCS_ENABLED', 'true'))

    # Keep milestone fields in calculation order
    app.json.sort_keys = False

    # Environment configuration
    app.config['ENVIRONMENT'] = os.getenv('ENVIRONMENT', 'development')
    app.config['DEBUG'] = app.config['ENVIRONMENT'] == 'development'
    app.config['DOCS_ENABLED'] = _env_flag('DOCS_ENABLED', 'true')
    app.config['OTEL_ENABLED'] = _env_flag('OTEL_ENABLED', 'true')
    app.config['SERVICE_VERSION'] = os.getenv('SERVICE_VERSION', '1.0.0')
    app.config['PORT'] = int(os.getenv('PORT', 3000))

    # Feature flags
    app.config['INCLUDE_LEGACY_ACTION_TYPES'] = _env_flag('INCLUDE_LEGACY_ACTION_TYPES', 'true')

    if config_overrides:
        app.config.update(config_overrides)

    # Add observability middleware
    add_observability_middleware(app)

    # Initialize middleware
    app.error_handler_middleware = ErrorHandlerMiddleware(app)
    app.cors_middleware = configure_cors(app)

    # Register routes
    from routes.terms import terms_bp
    app.register_api(terms_bp)

    @app.get('/health', tags=[health_tag], summary="Service health")
    def health_check():
        """Health check endpoint"""
        response = HealthCheckResponse(
            status="ok",
            message=SERVICE_MESSAGE,
            version=app.config['SERVICE_VERSION']
        )
        return jsonify(response.model_dump())

    return app


app = create_app()


if __name__ == '__main__':
    # Development server
    app.run(
        host='0.0.0.0',
        port=app.config['PORT'],
        debug=app.config['DEBUG']
    )
