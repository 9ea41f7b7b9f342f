"""
Pydantic models for response serialisation.

The error models define the JSON envelope shared by every error response,
whether it is produced by a FastAPI exception handler
(``error_handling.py``) or sent directly by an ASGI adapter
(``middleware.py``)::

    {"error": {"code": "malformed_request_body", "message": "..."}}
"""

import typing

import pydantic

# ──────────────────────────────────────────────────────────────────────────────
#  Response Models
# ──────────────────────────────────────────────────────────────────────────────


class RequestBodyResponse(pydantic.BaseModel):
    """
    Response body for the POST /v1/request-body endpoint, echoing what the
    body parsing middleware attached to the request.
    """

    raw_body: str | None = pydantic.Field(
        default=None,
        description="The request body exactly as received, or null when no strategy claimed it.",
    )

    parsed_body: dict[str, typing.Any] | list[typing.Any] | None = pydantic.Field(
        default=None,
        description=(
            "The decoded request body. Null for empty bodies, for JSON "
            "scalars, and for content types no strategy handles."
        ),
    )


# ──────────────────────────────────────────────────────────────────────────────
#  Error Models
# ──────────────────────────────────────────────────────────────────────────────


class ErrorDetail(pydantic.BaseModel):
    """Detailed error information nested inside the error response."""

    code: str = pydantic.Field(
        ...,
        description="A machine-readable error code in snake_case format.",
    )

    message: str = pydantic.Field(
        ...,
        description="A human-readable error description safe for display to end users.",
    )


class ErrorResponse(pydantic.BaseModel):
    """Standardised error response returned for all error conditions."""

    error: ErrorDetail = pydantic.Field(
        ...,
        description="An object containing error details.",
    )
