# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Error handling middleware with JSON error payloads.
Provides centralized error handling and formatting for the Flask application.
"""

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from typing import Dict, Any, Optional, Tuple
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging
import traceback

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_PREFIX = "Error al procesar la consulta"


class TermsApiException(Exception):
    """Base class for client errors raised by the API routes."""

    def __init__(self, message: str, status_code: int = 400, **fields: str):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.fields = fields

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.message}
        payload.update(self.fields)
        return payload


class MissingFieldException(TermsApiException):
    """A required body field is absent or empty."""

    def __init__(self, message: str, campo: str):
        super().__init__(message, 400, campo=campo)


class InvalidFieldException(TermsApiException):
    """A body field has the wrong type."""

    def __init__(self, message: str, campo: str):
        super().__init__(message, 400, campo=campo)


class InvalidJsonException(TermsApiException):
    """The request body is not valid JSON."""

    def __init__(self, detalle: str):
        super().__init__("JSON inválido en la petición", 400, detalle=detalle)


class ErrorHandlerMiddleware:
    """Centralized error handling middleware."""

    def __init__(self, app: Flask):
        self.app = app
        self.register_error_handlers()

    def register_error_handlers(self):
        """Register error handlers with Flask application."""

        @self.app.errorhandler(TermsApiException)
        def handle_terms_api_exception(error: TermsApiException):
            return self.handle_client_error(error)

        @self.app.errorhandler(404)
        def handle_not_found(error):
            return self.handle_http_error(error, "Recurso no encontrado", ruta=request.path)

        @self.app.errorhandler(405)
        def handle_method_not_allowed(error):
            return self.handle_http_error(error, "Método no permitido", metodo=request.method)

        @self.app.errorhandler(HTTPException)
        def handle_other_http_error(error):
            return self.handle_http_error(error, error.name)

        # Handle generic exceptions
        @self.app.errorhandler(Exception)
        def handle_generic_exception(error):
            return self.handle_unexpected_error(error)

    def handle_client_error(self, error: TermsApiException) -> Tuple[Any, int]:
        """
        Handle errors raised deliberately by the routes (4xx status codes).

        Args:
            error: API exception

        Returns:
            Tuple of (JSON response, status code)
        """
        with tracer.start_as_current_span("error_handler.client_error") as span:
            span.set_attributes({
                "error.type": error.__class__.__name__,
                "error.status": error.status_code,
                "http.method": request.method,
                "http.path": request.path
            })

            logger.warning(
                f"Client error: {error.message}",
                extra={
                    "error_type": error.__class__.__name__,
                    "status_code": error.status_code,
                    "path": request.path,
                    "method": request.method
                }
            )

            return jsonify(error.to_dict()), error.status_code

    def handle_http_error(
        self,
        error: HTTPException,
        message: Optional[str],
        **fields: str
    ) -> Tuple[Any, int]:
        """
        Handle routing and protocol errors raised by Flask itself.

        Args:
            error: HTTP exception
            message: Error message for the payload
            **fields: Extra payload fields

        Returns:
            Tuple of (JSON response, status code)
        """
        logger.info(
            f"HTTP error {error.code}: {message}",
            extra={
                "status_code": error.code,
                "path": request.path,
                "method": request.method
            }
        )

        payload = {"error": message}
        payload.update(fields)
        return jsonify(payload), error.code

    def handle_unexpected_error(self, error: Exception) -> Tuple[Any, int]:
        """
        Handle unexpected exceptions not caught by specific handlers.

        The raw exception message is part of the response body.

        Args:
            error: Unexpected exception

        Returns:
            Tuple of (JSON response, status code)
        """
        span = trace.get_current_span()
        span.record_exception(error)
        span.set_status(Status(StatusCode.ERROR, str(error)))

        logger.error(
            f"Unexpected error: {error.__class__.__name__}",
            extra={
                "error_class": error.__class__.__name__,
                "error_message": str(error),
                "path": request.path,
                "method": request.method,
                "traceback": traceback.format_exc()
            },
            exc_info=True
        )

        return jsonify({"error": f"{INTERNAL_ERROR_PREFIX}: {error}"}), 500
