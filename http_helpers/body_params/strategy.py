"""
Base class for request body parsing strategies.

A strategy claims a family of content types through ``match`` and turns a
request carrying such a body into a derived request with the raw body
attached (attribute ``rawBody``) and, where applicable, a parsed body.
"""

import abc

import http_helpers.messages

RAW_BODY_ATTRIBUTE = "rawBody"


class BodyParsingStrategy(abc.ABC):
    """Interface shared by every body parsing strategy."""

    @abc.abstractmethod
    def match(self, content_type: str) -> bool:
        """Return ``True`` when this strategy handles ``content_type``."""

    @abc.abstractmethod
    def parse(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.ServerRequest:
        """
        Return a request derived from ``request`` carrying the parsed body.

        Implementations read the body stream at most once and never mutate
        ``request`` itself.
        """
