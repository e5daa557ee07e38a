"""
Fixtures for acceptance tests against the HTTP API.
"""

import os
import pytest

os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('OTEL_ENABLED', 'false')

from app import create_app


@pytest.fixture
def test_client():
    """Test client of a fully configured application."""
    application = create_app({'TESTING': True})
    with application.test_client() as client:
        yield client
