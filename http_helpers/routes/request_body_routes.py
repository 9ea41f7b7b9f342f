"""
Route definitions for the request body echo endpoint.

``POST /v1/request-body`` returns the raw and parsed body that the body
parsing middleware attached to the request.  It lets clients check how a
given ``Content-Type`` and payload are interpreted.
"""

import typing

import fastapi

import http_helpers.dependencies
import http_helpers.models

request_body_router = fastapi.APIRouter(
    prefix="/v1",
    tags=["Request Body"],
)


@request_body_router.post(
    "/request-body",
    response_model=http_helpers.models.RequestBodyResponse,
    summary="Echo the parsed request body",
    status_code=200,
    responses={
        400: {
            "description": (
                "Bad Request: the body could not be decoded according to "
                "its Content-Type (``malformed_request_body``)."
            ),
            "model": http_helpers.models.ErrorResponse,
        },
    },
)
async def echo_request_body(
    request_body_parameters: typing.Annotated[
        http_helpers.dependencies.RequestBodyParameters,
        fastapi.Depends(http_helpers.dependencies.get_request_body_parameters),
    ],
) -> http_helpers.models.RequestBodyResponse:
    """Return what the body parsing strategies made of the request body."""
    return http_helpers.models.RequestBodyResponse(
        raw_body=request_body_parameters.raw_body,
        parsed_body=request_body_parameters.parsed_body,
    )
