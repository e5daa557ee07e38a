# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
CORS (Cross-Origin Resource Sharing) middleware.
Lets automation tools and browser clients on other origins call the API.
"""

from flask import Flask, request, make_response
from typing import List, Optional
import os
import logging

logger = logging.getLogger(__name__)


class CORSMiddleware:
    """CORS middleware for Flask applications."""

    def __init__(
        self,
        app: Flask,
        allowed_origins: Optional[List[str]] = None,
        allowed_methods: Optional[List[str]] = None,
        allowed_headers: Optional[List[str]] = None,
        max_age: Optional[int] = None
    ):
        """
        Initialize CORS middleware.

        Args:
            app: Flask application
            allowed_origins: List of allowed origins, '*' allows any origin
            allowed_methods: List of allowed HTTP methods
            allowed_headers: List of allowed request headers
            max_age: Preflight cache duration in seconds
        """
        self.app = app
        self.allowed_origins = allowed_origins or self._get_default_origins()
        self.allowed_methods = allowed_methods or ['GET', 'POST']
        self.allowed_headers = allowed_headers or ['Content-Type', 'Authorization']
        self.max_age = max_age

        self.register_cors_handlers()

    def _get_default_origins(self) -> List[str]:
        """Get allowed origins from environment, any origin by default."""
        custom_origins = os.getenv('CORS_ALLOWED_ORIGINS', '*')
        return [origin.strip() for origin in custom_origins.split(',') if origin.strip()]

    @property
    def allows_any_origin(self) -> bool:
        return '*' in self.allowed_origins

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        """
        Check if origin is allowed.

        Args:
            origin: Request origin

        Returns:
            True if origin is allowed
        """
        if self.allows_any_origin:
            return True

        if not origin:
            return False

        if origin in self.allowed_origins:
            return True

        # Prefix patterns such as http://localhost:*
        for allowed_origin in self.allowed_origins:
            if allowed_origin.endswith('*') and origin.startswith(allowed_origin[:-1]):
                return True

        return False

    def add_cors_headers(self, response, origin: Optional[str] = None, preflight: bool = False):
        """
        Add CORS headers to response.

        Args:
            response: Flask response object
            origin: Request origin
            preflight: Whether the response answers an OPTIONS preflight
        """
        if self.allows_any_origin:
            response.headers['Access-Control-Allow-Origin'] = '*'
        elif origin:
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers.add('Vary', 'Origin')

        if preflight:
            response.headers['Access-Control-Allow-Methods'] = ','.join(self.allowed_methods)
            response.headers['Access-Control-Allow-Headers'] = ','.join(self.allowed_headers)
            if self.max_age is not None:
                response.headers['Access-Control-Max-Age'] = str(self.max_age)

        return response

    def register_cors_handlers(self):
        """Register CORS handlers with Flask application."""

        @self.app.before_request
        def handle_preflight():
            """Handle CORS preflight requests."""
            if request.method == 'OPTIONS':
                origin = request.headers.get('Origin')

                if not self.is_origin_allowed(origin):
                    logger.warning(f"CORS preflight rejected for origin: {origin}")
                    return make_response('', 403)

                response = make_response('', 204)
                self.add_cors_headers(response, origin, preflight=True)

                logger.debug(f"CORS preflight handled for origin: {origin}")
                return response

        @self.app.after_request
        def add_cors_headers_to_response(response):
            """Add CORS headers to all non-preflight responses."""
            if request.method == 'OPTIONS':
                return response

            origin = request.headers.get('Origin')

            if self.is_origin_allowed(origin):
                self.add_cors_headers(response, origin)
            elif origin:
                logger.warning(f"CORS rejected for origin: {origin}")

            return response


def configure_cors(app: Flask, **kwargs) -> CORSMiddleware:
    """
    Configure CORS for Flask application.

    Args:
        app: Flask application
        **kwargs: CORS configuration options

    Returns:
        Configured CORSMiddleware instance
    """
    return CORSMiddleware(app, **kwargs)
