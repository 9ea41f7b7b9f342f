"""
FastAPI application factory.

The ``create_application`` function constructs a FastAPI instance with the
body parsing and Content-Length helpers mounted, error handling registered
and the demonstration routes included.  Using a factory function (rather
than a module-level global) makes the application straightforward to test
and re-create.
"""

import collections.abc
import contextlib

import fastapi
import structlog

import configuration
import http_helpers.body_params.middleware
import http_helpers.error_handling
import http_helpers.logging_config
import http_helpers.middleware
import http_helpers.routes.health_routes
import http_helpers.routes.request_body_routes

logger = structlog.get_logger()


def create_application(
    application_configuration: configuration.HelpersConfiguration | None = None,
) -> fastapi.FastAPI:
    """
    Create and fully configure the FastAPI application.

    This function:
      1. Reads configuration from environment variables unless a
         configuration object is supplied.
      2. Configures structured logging.
      3. Registers the error handlers.
      4. Adds the body parsing and Content-Length middleware.
      5. Includes all route handlers.
    """
    if application_configuration is None:
        application_configuration = configuration.HelpersConfiguration()
    http_helpers.logging_config.configure_logging(
        log_level=application_configuration.log_level,
    )

    body_params_middleware = http_helpers.body_params.middleware.BodyParamsMiddleware(
        non_body_request_methods=application_configuration.non_body_request_methods,
    )

    @contextlib.asynccontextmanager
    async def application_lifespan(
        fastapi_application: fastapi.FastAPI,
    ) -> collections.abc.AsyncIterator[None]:
        logger.info(
            "services_initialised",
            non_body_request_methods=sorted(application_configuration.non_body_request_methods),
            body_parsing_strategies=[
                type(strategy).__name__ for strategy in body_params_middleware.strategies
            ],
        )
        yield
        logger.info("services_shutdown_complete")

    fastapi_application = fastapi.FastAPI(
        title="HTTP Helpers",
        description=(
            "Request body parsing by Content-Type and automatic "
            "Content-Length response headers, mounted as ASGI middleware."
        ),
        version="1.0.0",
        lifespan=application_lifespan,
    )
    fastapi_application.state.body_params_middleware = body_params_middleware

    http_helpers.error_handling.register_error_handlers(fastapi_application)

    # ── Middleware registration ───────────────────────────────────────
    #
    # The last call to ``add_middleware`` produces the outermost layer:
    #
    #   Request → ContentLength → BodyParams → App

    fastapi_application.add_middleware(
        http_helpers.middleware.BodyParamsASGIMiddleware,
        body_params_middleware=body_params_middleware,
    )

    fastapi_application.add_middleware(
        http_helpers.middleware.ContentLengthASGIMiddleware,
    )

    fastapi_application.include_router(
        http_helpers.routes.request_body_routes.request_body_router,
    )
    fastapi_application.include_router(
        http_helpers.routes.health_routes.health_router,
    )

    return fastapi_application
