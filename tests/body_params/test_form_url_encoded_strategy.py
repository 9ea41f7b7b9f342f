"""Tests for http_helpers/body_params/form_url_encoded_strategy.py."""

import pytest

import http_helpers.body_params.form_url_encoded_strategy
import http_helpers.messages


@pytest.fixture
def strategy():
    return http_helpers.body_params.form_url_encoded_strategy.FormUrlEncodedStrategy()


def _form_request(body: str, parsed_body=None) -> http_helpers.messages.ServerRequest:
    return http_helpers.messages.ServerRequest(
        method="POST",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        body=http_helpers.messages.BufferedBody(body),
        parsed_body=parsed_body,
    )


class TestMatch:
    @pytest.mark.parametrize(
        "content_type",
        [
            "application/x-www-form-urlencoded",
            "application/x-www-form-urlencoded; charset=utf-8",
            "application/x-www-form-urlencoded;charset=utf-8",
        ],
    )
    def test_matches_form_url_encoded_types(self, strategy, content_type):
        assert strategy.match(content_type) is True

    @pytest.mark.parametrize(
        "content_type",
        [
            "application/x-www-form-urlencodedfoo",
            "application/json",
            "multipart/form-data",
            "text/plain",
        ],
    )
    def test_does_not_match_other_types(self, strategy, content_type):
        assert strategy.match(content_type) is False


class TestParse:
    def test_parses_body_into_dict(self, strategy):
        request = _form_request("foo=bar&baz=qux+quux")

        parsed_request = strategy.parse(request)

        assert parsed_request is not request
        assert parsed_request.get_attribute("rawBody") == "foo=bar&baz=qux+quux"
        assert parsed_request.parsed_body == {"foo": "bar", "baz": "qux quux"}

    def test_repeated_key_keeps_last_value(self, strategy):
        parsed_request = strategy.parse(_form_request("foo=first&foo=second"))

        assert parsed_request.parsed_body == {"foo": "second"}

    def test_bracketed_keys_collect_lists(self, strategy):
        parsed_request = strategy.parse(_form_request("tags[]=a&tags[]=b&empty="))

        assert parsed_request.parsed_body == {"tags": ["a", "b"], "empty": ""}

    def test_existing_parsed_body_is_returned_unchanged(self, strategy):
        request = _form_request("foo=bar", parsed_body={"already": "parsed"})

        assert strategy.parse(request) is request
        assert request.body.read() == b"foo=bar"

    def test_empty_body_only_sets_raw_body(self, strategy):
        parsed_request = strategy.parse(_form_request(""))

        assert parsed_request.get_attribute("rawBody") == ""
        assert parsed_request.parsed_body is None
