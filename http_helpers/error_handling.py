"""
Centralised error-handling registration for the FastAPI application.

Every ``HelperError`` raised inside a route or dependency is mapped to its
``status_code`` and rendered as the shared JSON error envelope:

    - Malformed request body              →  400 Bad Request

Errors raised inside ``BodyParamsASGIMiddleware`` never reach these
handlers, because user middleware runs outside FastAPI's exception
middleware; that adapter sends the same envelope itself.
"""

import fastapi
import fastapi.responses
import structlog

import http_helpers.exceptions
import http_helpers.middleware

logger = structlog.get_logger()


def register_error_handlers(fastapi_application: fastapi.FastAPI) -> None:
    """
    Register the helper exception handlers on the given FastAPI application.

    Must be called once during application initialisation (see
    ``server_factory.create_application``).
    """

    @fastapi_application.exception_handler(
        http_helpers.exceptions.HelperError,
    )
    async def handle_helper_error(
        request: fastapi.Request,
        helper_error: http_helpers.exceptions.HelperError,
    ) -> fastapi.responses.Response:
        """Return the helper error's status code with the JSON error envelope."""
        logger.warning(
            "helper_error",
            error_code=helper_error.error_code,
            status_code=helper_error.status_code,
            path=request.url.path,
            detail=helper_error.detail,
        )
        return fastapi.responses.Response(
            content=http_helpers.middleware.build_error_response_body(helper_error),
            status_code=helper_error.status_code,
            media_type="application/json",
        )
