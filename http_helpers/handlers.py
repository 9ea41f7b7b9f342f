"""
Request handler interface used by the helper middleware.

A middleware's ``process(request, handler)`` delegates to
``handler.handle(request)`` to obtain the response of the rest of the
pipeline.  The pipeline itself (routing, dispatch) lives outside this
package; ``CallableRequestHandler`` lets a plain function stand in for it.
"""

import collections.abc
import typing

import http_helpers.messages


class RequestHandler(typing.Protocol):
    """Anything that turns a ``ServerRequest`` into a ``Response``."""

    def handle(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.Response: ...


class CallableRequestHandler:
    """Adapt a ``request -> response`` callable to the ``RequestHandler`` protocol."""

    def __init__(
        self,
        handle_request: collections.abc.Callable[
            [http_helpers.messages.ServerRequest],
            http_helpers.messages.Response,
        ],
    ) -> None:
        self._handle_request = handle_request

    def handle(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.Response:
        return self._handle_request(request)
