"""
Custom exception classes for the HTTP helpers.

Exception hierarchy
-------------------
::

    Exception (Python built-in)
    └── HelperError (base class for all helper exceptions)
        └── MalformedRequestBodyError  → HTTP 400

Every helper exception carries a ``detail`` message and the HTTP
``status_code`` the caller is expected to answer with.  The error-handling
layer (``error_handling.py``) and the ASGI adapters (``middleware.py``)
translate them into the JSON error envelope without inspecting each
subclass individually.
"""


class HelperError(Exception):
    """
    Base exception for all helper-level errors.

    Attributes:
        detail: A human-readable description of the failure, safe for
            inclusion in API responses.
        status_code: The HTTP status code that classifies the failure.
        error_code: The machine-readable ``snake_case`` code used in the
            JSON error envelope.
    """

    default_detail: str = "An HTTP helper error occurred."
    status_code: int = 500
    error_code: str = "helper_error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class MalformedRequestBodyError(HelperError):
    """
    Raised when a non-empty request body cannot be decoded by the body
    parsing strategy that claimed its content type.

    Never raised for empty bodies, nor for bodies that decode to a JSON
    scalar or ``null``; those yield a ``None`` parsed body instead.
    """

    default_detail = "The request body is malformed."
    status_code = 400
    error_code = "malformed_request_body"
