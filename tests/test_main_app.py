# tests/test_main_app.py
from fastapi.testclient import TestClient
from keymantra.utils.logger import logger

def test_read_root(client: TestClient):
    """Test if the root endpoint returns the welcome message."""
    logger.info("Testing root endpoint...")
    response = client.get("/")
    assert response.status_code == 200
    json_response = response.json()
    assert "message" in json_response
    assert "Welcome to the KeyMantra API" in json_response["message"]
