"""
Middleware that fills in a missing ``Content-Length`` response header.

The response produced by the next handler is returned unchanged (the very
same object) when it already declares a ``Content-Length`` of any value, or
when its body size cannot be determined without buffering the stream.
Otherwise a derived response carrying the decimal byte count is returned.
"""

import structlog

import http_helpers.handlers
import http_helpers.messages

logger = structlog.get_logger()

CONTENT_LENGTH_HEADER = "Content-Length"


class ContentLengthMiddleware:
    """Attach ``Content-Length`` to responses whose body size is known."""

    def adjust(
        self,
        response: http_helpers.messages.Response,
    ) -> http_helpers.messages.Response:
        if response.has_header(CONTENT_LENGTH_HEADER):
            return response

        body_size = response.body.size
        if body_size is None:
            return response

        logger.debug("content_length_header_added", content_length=body_size)
        return response.with_header(CONTENT_LENGTH_HEADER, str(body_size))

    def process(
        self,
        request: http_helpers.messages.ServerRequest,
        handler: http_helpers.handlers.RequestHandler,
    ) -> http_helpers.messages.Response:
        return self.adjust(handler.handle(request))
