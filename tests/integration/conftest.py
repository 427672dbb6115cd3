"""Integration test fixtures (app client and service checks).

The HTTP tests run the full FastAPI app with the routing service swapped
for one over the fake embedding provider. Tests that need a real Redis are
skipped when it is not running.
"""

import pytest
from fastapi.testclient import TestClient
from redis import Redis

from centroid_router.api.dependencies import get_routing_service
from centroid_router.main import app
from centroid_router.persistence.memory_store import InMemoryCentroidStore
from centroid_router.service import RoutingService


@pytest.fixture
def api_store() -> InMemoryCentroidStore:
    """Store behind the API (empty until a test saves a table)."""
    return InMemoryCentroidStore()


@pytest.fixture
def api_service(fake_provider, api_store) -> RoutingService:
    return RoutingService(fake_provider, api_store, threshold=0.4)


@pytest.fixture
def client(api_service):
    """TestClient with the routing service overridden."""
    app.dependency_overrides[get_routing_service] = lambda: api_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def check_redis():
    """Check if Redis is available at localhost:6379.
    
    Skips tests if Redis is not reachable.
    """
    try:
        client = Redis.from_url("redis://localhost:6379/0")
        client.ping()
        client.close()
    except Exception as e:
        pytest.skip(f"Redis not available: {e}")


@pytest.fixture
def real_redis_client(check_redis):
    """Real Redis client instance for integration tests (sync).
    
    Requires Redis to be running (checked by check_redis fixture).
    Uses database 15 (test database).
    """
    client = Redis.from_url("redis://localhost:6379/15", decode_responses=True)
    client.flushdb()
    yield client
    client.flushdb()
    client.close()
