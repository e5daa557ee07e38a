# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest

# Set test environment before the application module is imported
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'

from app import create_app
from domain.business_days import parse_date


@pytest.fixture
def app():
    """Application configured for testing."""
    application = create_app({'TESTING': True})
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def client_without_legacy():
    """Test client with legacy action types disabled."""
    application = create_app({'TESTING': True, 'INCLUDE_LEGACY_ACTION_TYPES': False})
    with application.test_client() as client:
        yield client


@pytest.fixture
def fecha():
    """Build anchored dates from YYYY-MM-DD strings."""
    return parse_date
