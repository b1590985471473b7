"""
Snippetbox Backend — Health Endpoint Tests
"""

import pytest


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_health_returns_200(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"
        assert data["uptime_seconds"] >= 0
