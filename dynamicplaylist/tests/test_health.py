from __future__ import annotations

import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/health", "/api/v1/health"])
async def test_health_reports_ok(client, path):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
