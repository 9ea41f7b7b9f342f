"""
JSON request body parsing strategy.

Matches ``application/json`` and structured-syntax ``+json`` media types
(``application/hal+json``, ``application/vnd.resource.v2+json``), with or
without parameters such as ``;charset=utf-8``.

Parsing outcomes
----------------
- Empty body: ``rawBody`` is ``""`` and the parsed body is ``None``; the
  decoder is not invoked.
- Body decoding to an object or array: the parsed body is that structure.
- Body decoding to a scalar (``null``, ``true``, ``false``, a number or a
  string): the parsed body is ``None``.
- Integers too long for ``int`` decode as ``float``.
- Undecodable or too deeply nested body: ``MalformedRequestBodyError``
  (HTTP 400) is raised and left for the caller to translate into a response.
"""

import json
import re
import typing

import structlog

import http_helpers.body_params.strategy
import http_helpers.exceptions
import http_helpers.messages

logger = structlog.get_logger()

MALFORMED_JSON_MESSAGE_PREFIX = "Error when parsing JSON request body: "

# ``application/json`` or ``application/<subtype>+json``, where the subtype
# is non-empty and contains no ``+``, ``/`` or whitespace.
_JSON_MEDIA_TYPE_PATTERN = re.compile(r"application/(?:[^\s/+]+\+)?json")


def _reject_non_finite_constant(constant_name: str) -> typing.NoReturn:
    raise ValueError(f"Invalid JSON literal {constant_name!r}")


def _parse_integer_literal(integer_text: str) -> int | float:
    # Integers beyond the interpreter's int-string digit limit decode as float.
    try:
        return int(integer_text)
    except ValueError:
        return float(integer_text)


class JsonStrategy(http_helpers.body_params.strategy.BodyParsingStrategy):
    """Decode JSON request bodies into the request's parsed body."""

    def match(self, content_type: str) -> bool:
        media_type = content_type.split(";", 1)[0].strip()
        return _JSON_MEDIA_TYPE_PATTERN.fullmatch(media_type) is not None

    def parse(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.ServerRequest:
        raw_body_bytes = request.body.read()

        try:
            raw_body = raw_body_bytes.decode("utf-8")
        except UnicodeDecodeError as decode_error:
            raise http_helpers.exceptions.MalformedRequestBodyError(
                MALFORMED_JSON_MESSAGE_PREFIX + str(decode_error),
            ) from decode_error

        request = request.with_attribute(
            http_helpers.body_params.strategy.RAW_BODY_ATTRIBUTE,
            raw_body,
        )

        if raw_body == "":
            return request.with_parsed_body(None)

        try:
            decoded_body = json.loads(
                raw_body,
                parse_constant=_reject_non_finite_constant,
                parse_int=_parse_integer_literal,
            )
        except (ValueError, RecursionError) as decode_error:
            raise http_helpers.exceptions.MalformedRequestBodyError(
                MALFORMED_JSON_MESSAGE_PREFIX + str(decode_error),
            ) from decode_error

        if not isinstance(decoded_body, (dict, list)):
            decoded_body = None

        logger.debug(
            "request_body_parsed",
            strategy="json",
            raw_body_bytes=len(raw_body_bytes),
            parsed_body_type=type(decoded_body).__name__,
        )
        return request.with_parsed_body(decoded_body)
