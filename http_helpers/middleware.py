"""
ASGI adapters that mount the helper middleware on a Starlette/FastAPI app.

- **BodyParamsASGIMiddleware**: reads the full request body once, runs it
  through ``BodyParamsMiddleware`` and stores the outcome on
  ``scope["state"]`` (``raw_body`` and ``parsed_body``), so route handlers
  can read ``request.state.parsed_body``.  The body bytes are replayed to
  the inner application, which can still call ``await request.body()``.
  A malformed body is answered with HTTP 400 (``malformed_request_body``)
  before the inner application runs.
  The request method and path are bound to the structlog context so every
  event logged while handling the request carries them.

- **ContentLengthASGIMiddleware**: holds back ``http.response.start`` until
  the first body message arrives.  When that message is the whole body
  (``more_body`` false) its size is known and ``ContentLengthMiddleware``
  adds the header; a streamed body has no determinable size and the
  response passes through unchanged.
  Statuses that carry no body (1xx, 204 and 304) are never given the
  header.

Both are implemented as pure ASGI middleware rather than
``BaseHTTPMiddleware`` so that streamed responses are not buffered and
exceptions are not wrapped in ``ExceptionGroup``.

Middleware registration order
-----------------------------
ASGI middleware executes in reverse registration order (last registered =
outermost).  ``create_application`` registers them so that execution is::

    Request → ContentLength → BodyParams → App

which lets the 400 response sent by ``BodyParamsASGIMiddleware`` receive
its ``content-length`` header too.
"""

import collections.abc

import starlette.datastructures
import starlette.types
import structlog

import http_helpers.body_params.middleware
import http_helpers.body_params.strategy
import http_helpers.content_length
import http_helpers.exceptions
import http_helpers.messages
import http_helpers.models

logger = structlog.get_logger()

_STATUSES_WITHOUT_CONTENT_LENGTH = frozenset([*range(100, 200), 204, 304])


async def read_request_body(receive: starlette.types.Receive) -> bytes:
    """
    Drain every ``http.request`` message from ``receive`` and return the
    concatenated body.  Stops early on ``http.disconnect``.
    """
    body_chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        body_chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(body_chunks)


def build_error_response_body(helper_error: http_helpers.exceptions.HelperError) -> bytes:
    """Serialise ``helper_error`` into the standard JSON error envelope."""
    error_response = http_helpers.models.ErrorResponse(
        error=http_helpers.models.ErrorDetail(
            code=helper_error.error_code,
            message=helper_error.detail,
        ),
    )
    return error_response.model_dump_json().encode()


class BodyParamsASGIMiddleware:
    """
    Parse request bodies by Content-Type before the inner application runs.

    The non-body request methods (``GET``, ``HEAD``, ``OPTIONS`` by default)
    and the strategy list are those of the wrapped ``BodyParamsMiddleware``;
    pass a pre-configured instance to customise them.
    """

    def __init__(
        self,
        app: starlette.types.ASGIApp,
        non_body_request_methods: collections.abc.Iterable[str] = (
            http_helpers.body_params.middleware.DEFAULT_NON_BODY_REQUEST_METHODS
        ),
        body_params_middleware: http_helpers.body_params.middleware.BodyParamsMiddleware | None = None,
    ) -> None:
        self.app = app
        self._body_params_middleware = body_params_middleware or (
            http_helpers.body_params.middleware.BodyParamsMiddleware(
                non_body_request_methods=non_body_request_methods,
            )
        )

    async def __call__(
        self,
        scope: starlette.types.Scope,
        receive: starlette.types.Receive,
        send: starlette.types.Send,
    ) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
        )

        request_body = await read_request_body(receive)
        request = http_helpers.messages.ServerRequest(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/"),
            headers=starlette.datastructures.Headers(scope=scope),
            body=http_helpers.messages.BufferedBody(request_body),
        )

        try:
            prepared_request = self._body_params_middleware.prepare(request)
        except http_helpers.exceptions.MalformedRequestBodyError as malformed_body_error:
            logger.warning(
                "request_body_malformed",
                content_type=request.get_header_line("Content-Type"),
                detail=malformed_body_error.detail,
            )
            await self._send_error_response(send, malformed_body_error)
            return

        if "state" not in scope:
            scope["state"] = {}
        scope["state"]["raw_body"] = prepared_request.get_attribute(
            http_helpers.body_params.strategy.RAW_BODY_ATTRIBUTE,
        )
        scope["state"]["parsed_body"] = prepared_request.parsed_body

        request_body_replayed = False

        async def receive_with_replayed_body() -> starlette.types.Message:
            nonlocal request_body_replayed
            if not request_body_replayed:
                request_body_replayed = True
                return {
                    "type": "http.request",
                    "body": request_body,
                    "more_body": False,
                }
            return await receive()

        await self.app(scope, receive_with_replayed_body, send)

    @staticmethod
    async def _send_error_response(
        send: starlette.types.Send,
        helper_error: http_helpers.exceptions.HelperError,
    ) -> None:
        """Send ``helper_error`` as a JSON error response with its status code."""
        response_body = build_error_response_body(helper_error)

        await send(
            {
                "type": "http.response.start",
                "status": helper_error.status_code,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(response_body)).encode()),
                ],
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": response_body,
            }
        )


class ContentLengthASGIMiddleware:
    """Add ``content-length`` to responses sent as a single body message."""

    def __init__(
        self,
        app: starlette.types.ASGIApp,
        content_length_middleware: http_helpers.content_length.ContentLengthMiddleware | None = None,
    ) -> None:
        self.app = app
        self._content_length_middleware = (
            content_length_middleware or http_helpers.content_length.ContentLengthMiddleware()
        )

    async def __call__(
        self,
        scope: starlette.types.Scope,
        receive: starlette.types.Receive,
        send: starlette.types.Send,
    ) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        deferred_response_start: starlette.types.Message | None = None

        async def send_with_content_length(message: starlette.types.Message) -> None:
            nonlocal deferred_response_start
            if message["type"] == "http.response.start":
                deferred_response_start = message
                return
            if message["type"] == "http.response.body" and deferred_response_start is not None:
                response_start = self._complete_response_start(deferred_response_start, message)
                deferred_response_start = None
                await send(response_start)
            await send(message)

        await self.app(scope, receive, send_with_content_length)

        # The application started a response but never sent a body message.
        if deferred_response_start is not None:
            await send(deferred_response_start)

    def _complete_response_start(
        self,
        response_start: starlette.types.Message,
        first_body_message: starlette.types.Message,
    ) -> starlette.types.Message:
        """
        Return ``response_start`` with a ``content-length`` header when the
        first body message carries the complete body and no length was
        declared, otherwise return it unchanged.
        """
        if response_start["status"] in _STATUSES_WITHOUT_CONTENT_LENGTH:
            return response_start

        response_body: http_helpers.messages.MessageBody
        if first_body_message.get("more_body", False):
            response_body = http_helpers.messages.StreamingBody()
        else:
            response_body = http_helpers.messages.BufferedBody(first_body_message.get("body", b""))

        response = http_helpers.messages.Response(
            status_code=response_start["status"],
            headers=starlette.datastructures.Headers(raw=list(response_start.get("headers", []))),
            body=response_body,
        )
        adjusted_response = self._content_length_middleware.adjust(response)
        if adjusted_response is response:
            return response_start

        return {**response_start, "headers": adjusted_response.headers.raw}
