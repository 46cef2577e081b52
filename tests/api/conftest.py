"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client(processing_config):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from main import app

    app.state.processing_config = processing_config
    app.state.environment = "test"
    app.state.debug = False

    # Create test client (no context manager so lifespan does not overwrite state)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    del app.state.processing_config
