"""
Middleware that parses request bodies according to their Content-Type.

The middleware holds an ordered list of body parsing strategies.  For each
request that may carry a body, the first strategy whose ``match`` accepts
the ``Content-Type`` header parses the request, and the derived request is
handed to the next handler.  Requests whose method never carries a body
(``GET``, ``HEAD``, ``OPTIONS`` by default) are handed on untouched, as are
requests no strategy claims.

``MalformedRequestBodyError`` raised by a strategy is not caught here; it
propagates to the caller.
"""

import collections.abc

import http_helpers.body_params.form_url_encoded_strategy
import http_helpers.body_params.json_strategy
import http_helpers.body_params.strategy
import http_helpers.handlers
import http_helpers.messages

DEFAULT_NON_BODY_REQUEST_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS"})


class BodyParamsMiddleware:
    """Select a body parsing strategy per request and apply it."""

    def __init__(
        self,
        non_body_request_methods: collections.abc.Iterable[str] = DEFAULT_NON_BODY_REQUEST_METHODS,
    ) -> None:
        self._non_body_request_methods = frozenset(method.upper() for method in non_body_request_methods)
        self._strategies: list[http_helpers.body_params.strategy.BodyParsingStrategy] = []
        self.add_strategy(http_helpers.body_params.form_url_encoded_strategy.FormUrlEncodedStrategy())
        self.add_strategy(http_helpers.body_params.json_strategy.JsonStrategy())

    @property
    def strategies(self) -> tuple[http_helpers.body_params.strategy.BodyParsingStrategy, ...]:
        return tuple(self._strategies)

    def add_strategy(self, strategy: http_helpers.body_params.strategy.BodyParsingStrategy) -> None:
        """Append ``strategy``; earlier strategies take precedence."""
        self._strategies.append(strategy)

    def clear_strategies(self) -> None:
        """Remove every registered strategy, including the defaults."""
        self._strategies = []

    def prepare(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.ServerRequest:
        """Return ``request`` parsed by the first matching strategy, if any."""
        if request.method in self._non_body_request_methods:
            return request

        content_type = request.get_header_line("Content-Type")
        for strategy in self._strategies:
            if strategy.match(content_type):
                return strategy.parse(request)

        return request

    def process(
        self,
        request: http_helpers.messages.ServerRequest,
        handler: http_helpers.handlers.RequestHandler,
    ) -> http_helpers.messages.Response:
        return handler.handle(self.prepare(request))
