# SPDX-License-Identifier: Apache-2.0

"""
Tests for CORS and error handling middleware.
"""

import json
from unittest.mock import patch

import pytest
from flask import Flask, jsonify

from middleware.cors import CORSMiddleware, configure_cors
from middleware.error_handler import (
    ErrorHandlerMiddleware,
    InvalidJsonException,
    MissingFieldException,
    TermsApiException,
)


@pytest.fixture
def bare_app():
    """Plain Flask app with a few routes that raise."""
    app = Flask(__name__)
    app.config['TESTING'] = True

    @app.route('/ok', methods=['GET', 'POST'])
    def ok():
        return jsonify({'ok': True})

    @app.route('/missing')
    def missing():
        raise MissingFieldException('Falta el campo', 'tipoAccion')

    @app.route('/teapot')
    def teapot():
        raise TermsApiException('No soy cafetera', 418, detalle='té')

    @app.route('/crash')
    def crash():
        raise KeyError('fechaInicial')

    return app


class TestCORSMiddleware:
    """Test CORSMiddleware."""

    def test_wildcard_by_default(self, bare_app, monkeypatch):
        """Test default origins from the environment."""
        monkeypatch.delenv('CORS_ALLOWED_ORIGINS', raising=False)
        cors = CORSMiddleware(bare_app)
        assert cors.allows_any_origin
        assert cors.is_origin_allowed(None)
        assert cors.is_origin_allowed('https://cualquiera.co')

    def test_origins_from_environment(self, bare_app):
        """Test CORS_ALLOWED_ORIGINS parsing."""
        with patch.dict('os.environ', {'CORS_ALLOWED_ORIGINS': 'https://a.co, http://localhost:*'}):
            cors = CORSMiddleware(bare_app)

        assert cors.allowed_origins == ['https://a.co', 'http://localhost:*']
        assert not cors.allows_any_origin
        assert cors.is_origin_allowed('https://a.co')
        assert cors.is_origin_allowed('http://localhost:5173')
        assert not cors.is_origin_allowed('https://b.co')
        assert not cors.is_origin_allowed(None)

    def test_restricted_origin_is_echoed(self, bare_app):
        """Test that allowed origins are echoed back with Vary."""
        configure_cors(bare_app, allowed_origins=['https://a.co'])
        client = bare_app.test_client()

        response = client.get('/ok', headers={'Origin': 'https://a.co'})
        assert response.headers['Access-Control-Allow-Origin'] == 'https://a.co'
        assert 'Origin' in response.headers.get('Vary', '')

        response = client.get('/ok', headers={'Origin': 'https://b.co'})
        assert response.status_code == 200
        assert 'Access-Control-Allow-Origin' not in response.headers

    def test_preflight_rejected_for_unknown_origin(self, bare_app):
        """Test 403 for a disallowed preflight."""
        configure_cors(bare_app, allowed_origins=['https://a.co'])
        client = bare_app.test_client()

        response = client.options('/ok', headers={'Origin': 'https://b.co'})
        assert response.status_code == 403

    def test_preflight_max_age(self, bare_app):
        """Test optional preflight caching header."""
        configure_cors(bare_app, max_age=600)
        client = bare_app.test_client()

        response = client.options('/ok', headers={'Origin': 'https://a.co'})
        assert response.status_code == 204
        assert response.headers['Access-Control-Max-Age'] == '600'
        assert response.headers['Access-Control-Allow-Methods'] == 'GET,POST'


class TestErrorHandlerMiddleware:
    """Test ErrorHandlerMiddleware."""

    def test_client_error(self, bare_app):
        """Test deliberate client errors."""
        ErrorHandlerMiddleware(bare_app)

        response = bare_app.test_client().get('/missing')
        assert response.status_code == 400
        assert json.loads(response.data) == {'error': 'Falta el campo', 'campo': 'tipoAccion'}

    def test_custom_status_and_fields(self, bare_app):
        """Test arbitrary status codes and payload fields."""
        ErrorHandlerMiddleware(bare_app)

        response = bare_app.test_client().get('/teapot')
        assert response.status_code == 418
        assert json.loads(response.data) == {'error': 'No soy cafetera', 'detalle': 'té'}

    def test_unexpected_error(self, bare_app):
        """Test that unexpected errors become 500 with the raw message."""
        ErrorHandlerMiddleware(bare_app)

        response = bare_app.test_client().get('/crash')
        assert response.status_code == 500
        assert json.loads(response.data) == {
            'error': "Error al procesar la consulta: 'fechaInicial'"
        }

    def test_not_found_and_method_not_allowed(self, bare_app):
        """Test JSON routing errors."""
        ErrorHandlerMiddleware(bare_app)
        client = bare_app.test_client()

        assert json.loads(client.get('/nada').data) == {
            'error': 'Recurso no encontrado', 'ruta': '/nada'
        }
        response = client.delete('/ok')
        assert response.status_code == 405
        assert json.loads(response.data) == {'error': 'Método no permitido', 'metodo': 'DELETE'}

    def test_invalid_json_exception_payload(self):
        """Test InvalidJsonException fields."""
        error = InvalidJsonException('Expecting value')
        assert error.status_code == 400
        assert error.to_dict() == {'error': 'JSON inválido en la petición', 'detalle': 'Expecting value'}
