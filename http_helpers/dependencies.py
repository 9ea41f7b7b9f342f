"""
FastAPI dependency injection providers.

Route handlers receive the request body outcome through these providers
rather than reading ``request.state`` directly.  When
``BodyParamsASGIMiddleware`` is mounted, its results are returned as-is.
Otherwise the body is parsed on demand with the application's
``BodyParamsMiddleware``; a malformed body then raises
``MalformedRequestBodyError``, which ``error_handling.py`` turns into
HTTP 400.
"""

import typing

import fastapi

import http_helpers.body_params.middleware
import http_helpers.body_params.strategy
import http_helpers.messages


class RequestBodyParameters:
    """The raw and parsed body attached to a request."""

    def __init__(self, raw_body: str | None, parsed_body: typing.Any) -> None:
        self.raw_body = raw_body
        self.parsed_body = parsed_body


def get_body_params_middleware(
    request: fastapi.Request,
) -> http_helpers.body_params.middleware.BodyParamsMiddleware:
    """
    Retrieve the shared BodyParamsMiddleware from application state, or a
    default-configured one when the application did not register any.
    """
    body_params_middleware = getattr(request.app.state, "body_params_middleware", None)
    if body_params_middleware is None:
        return http_helpers.body_params.middleware.BodyParamsMiddleware()
    return body_params_middleware  # type: ignore[no-any-return]


async def get_request_body_parameters(
    request: fastapi.Request,
    body_params_middleware: typing.Annotated[
        http_helpers.body_params.middleware.BodyParamsMiddleware,
        fastapi.Depends(get_body_params_middleware),
    ],
) -> RequestBodyParameters:
    """Return the request's raw and parsed body."""
    if hasattr(request.state, "parsed_body"):
        return RequestBodyParameters(
            raw_body=request.state.raw_body,
            parsed_body=request.state.parsed_body,
        )

    prepared_request = body_params_middleware.prepare(
        http_helpers.messages.ServerRequest(
            method=request.method,
            path=request.url.path,
            headers=request.headers,
            body=http_helpers.messages.BufferedBody(await request.body()),
        ),
    )
    return RequestBodyParameters(
        raw_body=prepared_request.get_attribute(http_helpers.body_params.strategy.RAW_BODY_ATTRIBUTE),
        parsed_body=prepared_request.parsed_body,
    )
