"""Tests for http_helpers/messages.py: bodies, ServerRequest and Response."""

import http_helpers.messages


class TestBufferedBody:
    def test_size_is_byte_length(self):
        assert http_helpers.messages.BufferedBody("héllo").size == 6

    def test_body_is_exhausted_after_read(self):
        body = http_helpers.messages.BufferedBody(b"payload")

        assert body.read() == b"payload"
        assert body.read() == b""

    def test_rewind_allows_reading_again(self):
        body = http_helpers.messages.BufferedBody(b"payload")
        body.read()

        body.rewind()

        assert body.read() == b"payload"


class TestStreamingBody:
    def test_size_is_unknown(self):
        assert http_helpers.messages.StreamingBody([b"chunk"]).size is None

    def test_read_joins_chunks_once(self):
        body = http_helpers.messages.StreamingBody(iter([b"one", b"two"]))

        assert body.read() == b"onetwo"
        assert body.read() == b""

        body.rewind()
        assert body.read() == b"onetwo"


class TestServerRequest:
    def test_method_is_uppercased(self):
        assert http_helpers.messages.ServerRequest(method="post").method == "POST"

    def test_with_attribute_returns_new_instance(self):
        request = http_helpers.messages.ServerRequest()

        derived_request = request.with_attribute("rawBody", "{}")

        assert derived_request is not request
        assert derived_request.get_attribute("rawBody") == "{}"
        assert request.get_attribute("rawBody") is None
        assert request.get_attribute("rawBody", "default") == "default"

    def test_parsed_body_is_exposed_as_attribute(self):
        request = http_helpers.messages.ServerRequest().with_parsed_body({"foo": "bar"})

        assert request.parsed_body == {"foo": "bar"}
        assert request.get_attribute("parsedBody") == {"foo": "bar"}
        assert request.attributes == {"parsedBody": {"foo": "bar"}}

    def test_with_attribute_parsed_body_sets_parsed_body(self):
        request = http_helpers.messages.ServerRequest().with_attribute("parsedBody", [1])

        assert request.parsed_body == [1]

    def test_headers_are_case_insensitive(self):
        request = http_helpers.messages.ServerRequest(headers={"Content-Type": "application/json"})

        assert request.has_header("content-type")
        assert request.get_header_line("CONTENT-TYPE") == "application/json"
        assert request.get_header_line("Accept") == ""


class TestResponse:
    def test_with_header_replaces_existing_values(self):
        response = (
            http_helpers.messages.Response()
            .with_added_header("X-Trace", "one")
            .with_added_header("X-Trace", "two")
        )

        replaced_response = response.with_header("x-trace", "three")

        assert response.get_header_line("X-Trace") == "one, two"
        assert replaced_response.headers.getlist("X-Trace") == ["three"]

    def test_with_status_and_body_leave_original_untouched(self):
        response = http_helpers.messages.Response()
        new_body = http_helpers.messages.BufferedBody("new")

        derived_response = response.with_status(201).with_body(new_body)

        assert response.status_code == 200
        assert response.body.size == 0
        assert derived_response.status_code == 201
        assert derived_response.body is new_body
