"""Tests for GET /health."""

import pytest


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_returns_healthy(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_cache_suppression_headers(self, client):
        response = await client.get("/health")

        assert response.headers["Cache-Control"] == "no-store, no-cache"
        assert response.headers["Pragma"] == "no-cache"
