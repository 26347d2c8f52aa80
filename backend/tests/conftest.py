"""
Root pytest configuration for backend tests.

Provides:
- backend/ on sys.path (imports like `from binding.endpoints import ...`)
- Shared fixtures (app, client, bare_app)
"""

import sys
from pathlib import Path

backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from flask import Flask


@pytest.fixture
def app():
    """Demo Flask application with all middleware installed."""
    from app import create_app

    app = create_app()
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def bare_app():
    """Flask app with no error handlers, so unhandled faults reach the test."""
    app = Flask(__name__)
    app.config['TESTING'] = True
    return app
