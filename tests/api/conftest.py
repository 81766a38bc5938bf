"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from core.parallel import RowParallelExecutor
    from main import app
    from services.image_service import ImageOperationsService

    executor = RowParallelExecutor()

    app.state.executor = executor
    app.state.image_service = ImageOperationsService(executor=executor)
    app.state.config = {"environment": "test", "system": {"log_level": "INFO", "debug": False}}

    # No context manager: lifespan would replace the state set above
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client
