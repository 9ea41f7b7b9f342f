"""Shared fixtures for route integration tests."""

import fastapi
import httpx
import pytest
import pytest_asyncio

import http_helpers.body_params.middleware
import http_helpers.error_handling
import http_helpers.middleware
import http_helpers.routes.health_routes
import http_helpers.routes.request_body_routes


def _build_app(mount_body_params_middleware: bool) -> fastapi.FastAPI:
    app = fastapi.FastAPI()
    http_helpers.error_handling.register_error_handlers(app)

    body_params_middleware = http_helpers.body_params.middleware.BodyParamsMiddleware()
    app.state.body_params_middleware = body_params_middleware

    if mount_body_params_middleware:
        app.add_middleware(
            http_helpers.middleware.BodyParamsASGIMiddleware,
            body_params_middleware=body_params_middleware,
        )
    app.add_middleware(http_helpers.middleware.ContentLengthASGIMiddleware)

    app.include_router(http_helpers.routes.request_body_routes.request_body_router)
    app.include_router(http_helpers.routes.health_routes.health_router)
    return app


@pytest.fixture(params=[True, False], ids=["body_params_middleware", "dependency_fallback"])
def test_app(request):
    """
    The routes behave identically whether the body was parsed by
    ``BodyParamsASGIMiddleware`` or on demand by the dependency provider.
    """
    return _build_app(mount_body_params_middleware=request.param)


@pytest_asyncio.fixture
async def client(test_app):
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
