"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from intendhooks.core.config import PomodoroPolicy


@pytest_asyncio.fixture
async def integration_app(store_group, monkeypatch):
    """集成测试用 FastAPI app"""
    monkeypatch.delenv("FRONTEND_ORIGIN", raising=False)

    from intendhooks.gateway.main import create_app

    app = create_app()
    app.state.store_group = store_group
    app.state.pomodoro_policy = PomodoroPolicy()
    yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
