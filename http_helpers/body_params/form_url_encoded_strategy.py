"""
``application/x-www-form-urlencoded`` request body parsing strategy.

Servers frequently decode form bodies themselves; when the request already
carries a non-empty parsed body it is returned as-is.  Otherwise the body is
read once and decoded into a dict: a repeated key keeps its last value, and
keys ending in ``[]`` collect every value into a list under the bare name.
"""

import re
import typing
import urllib.parse

import structlog

import http_helpers.body_params.strategy
import http_helpers.messages

logger = structlog.get_logger()

_FORM_URL_ENCODED_PATTERN = re.compile(r"^application/x-www-form-urlencoded(?:$|[ ;])")


class FormUrlEncodedStrategy(http_helpers.body_params.strategy.BodyParsingStrategy):
    """Decode URL-encoded form bodies into the request's parsed body."""

    def match(self, content_type: str) -> bool:
        return _FORM_URL_ENCODED_PATTERN.match(content_type) is not None

    def parse(
        self,
        request: http_helpers.messages.ServerRequest,
    ) -> http_helpers.messages.ServerRequest:
        if request.parsed_body:
            return request

        raw_body = request.body.read().decode("utf-8", errors="replace")
        request = request.with_attribute(
            http_helpers.body_params.strategy.RAW_BODY_ATTRIBUTE,
            raw_body,
        )

        if raw_body == "":
            return request

        parsed_body: dict[str, typing.Any] = {}
        for field_name, field_value in urllib.parse.parse_qsl(raw_body, keep_blank_values=True):
            if field_name.endswith("[]"):
                collected_values = parsed_body.get(field_name[:-2])
                if not isinstance(collected_values, list):
                    collected_values = parsed_body[field_name[:-2]] = []
                collected_values.append(field_value)
            else:
                parsed_body[field_name] = field_value

        logger.debug(
            "request_body_parsed",
            strategy="form_url_encoded",
            field_count=len(parsed_body),
        )
        return request.with_parsed_body(parsed_body)
