"""
Pytest configuration for API integration tests
"""

import base64

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client(tmp_path):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from core.image_manager import ImageManager
    from main import app

    image_manager = ImageManager(max_size_mb=100, max_images=10)

    app.state.image_manager = image_manager
    app.state.config = {"environment": "test", "image": {"storage_dir": str(tmp_path)}}

    # Create test client (no context manager so the lifespan does not replace state)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    image_manager.cleanup()


@pytest.fixture
def loaded_image_id(client, png_bytes):
    """Load the shared test image through the API and return its ID"""
    response = client.post(
        "/api/image/load", json={"image_base64": base64.b64encode(png_bytes).decode()}
    )
    assert response.status_code == 200
    return response.json()["image_id"]
