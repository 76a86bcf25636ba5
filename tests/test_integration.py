"""Integration tests for the FastAPI server."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Settings
from main import app
from routers.completion import get_llm_client, get_settings
from utils.metrics import metrics


class StubClient:
    """Returns a fixed raw completion for every request."""

    model = "stub-model"

    def __init__(self, text: str):
        self.text = text

    async def complete(self, system_prompt: str, prompt: str) -> str:
        return self.text


class FailingClient:
    """Raises on every request."""

    model = "stub-model"

    async def complete(self, system_prompt: str, prompt: str) -> str:
        raise ConnectionError("endpoint unreachable")


@pytest.fixture(autouse=True)
def reset_state():
    """Reset state and install stub dependencies before each test."""
    metrics.reset()
    app.dependency_overrides[get_llm_client] = lambda: StubClient("// greet\nprint('hi')")
    app.dependency_overrides[get_settings] = lambda: Settings(languages=["python", "javascript"])
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    """Create an async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_endpoint(client):
    """Should return health status."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert "uptime" in data
    assert "uptimeHuman" in data
    assert "metrics" in data


@pytest.mark.asyncio
async def test_health_metrics_structure(client):
    """Should return correct metrics structure."""
    response = await client.get("/health")

    assert response.status_code == 200
    metrics_data = response.json()["metrics"]

    assert "totalRequests" in metrics_data
    assert "emptyCompletions" in metrics_data
    assert "avgResponseTimeMs" in metrics_data
    assert "requestsByLanguage" in metrics_data
    assert "errorCount" in metrics_data


@pytest.mark.asyncio
async def test_inline_returns_suggestion(client):
    """Should return the sanitized suggestion and its range."""
    response = await client.post(
        "/inline",
        json={
            "text": "def greet():\n    ",
            "language": "python",
            "position": {"line": 1, "character": 4},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["completion"] == "print('hi')"
    assert data["error"] is None
    assert data["requestId"]
    assert data["range"] == {
        "start": {"line": 1, "character": 4},
        "end": {"line": 1, "character": 4},
    }


@pytest.mark.asyncio
async def test_inline_failure_returns_no_suggestion(client):
    """Should answer 200 with an empty completion and an error message."""
    app.dependency_overrides[get_llm_client] = lambda: FailingClient()

    response = await client.post(
        "/inline",
        json={"text": "x = ", "language": "python", "position": {"line": 0, "character": 4}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["completion"] == ""
    assert data["range"] is None
    assert data["error"] == "endpoint unreachable"

    health = await client.get("/health")
    assert health.json()["metrics"]["errorCount"] == 1


@pytest.mark.asyncio
async def test_inline_unsupported_language(client):
    """Should return no suggestion for a language that is not enabled."""
    response = await client.post(
        "/inline",
        json={"text": "fn ", "language": "rust", "position": {"line": 0, "character": 3}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["completion"] == ""
    assert data["range"] is None


@pytest.mark.asyncio
async def test_cors_headers(client):
    """Should include CORS headers."""
    response = await client.options(
        "/inline",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


@pytest.mark.asyncio
async def test_validation_error_missing_text(client):
    """Should return 422 for missing text."""
    response = await client.post(
        "/inline",
        json={"language": "python", "position": {"line": 0, "character": 0}},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_validation_error_missing_position(client):
    """Should return 422 for missing position."""
    response = await client.post(
        "/inline",
        json={"text": "x", "language": "python"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_validation_error_negative_position(client):
    """Should return 422 for a negative cursor line."""
    response = await client.post(
        "/inline",
        json={"text": "x", "language": "python", "position": {"line": -1, "character": 0}},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_not_found(client):
    """Should return 404 for unknown routes."""
    response = await client.get("/unknown")
    assert response.status_code == 404
