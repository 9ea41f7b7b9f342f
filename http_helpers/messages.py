"""
Immutable HTTP message value objects consumed by the helpers.

``ServerRequest`` and ``Response`` follow a copy-on-write discipline: every
``with_*`` method returns a new instance and leaves the receiver untouched.
Callers can therefore compare identities to learn whether a helper modified
a message (``returned is original`` means "not modified").

Headers are held in ``starlette.datastructures.Headers``, which gives
case-insensitive lookups (``"content-length" in headers`` matches a
``Content-Length`` header) and is itself immutable.

Message bodies
--------------
A body is an exhaustible byte stream:

- ``BufferedBody`` wraps content already held in memory.  Its ``size`` is
  the byte length of that content.
- ``StreamingBody`` wraps an iterable of chunks whose total length cannot
  be known without consuming it, so its ``size`` is ``None``.

``read()`` returns everything from the current position to the end and
leaves the position at the end; reading again without ``rewind()`` yields
``b""``.
"""

import collections.abc
import copy
import typing

import starlette.datastructures


class MessageBody(typing.Protocol):
    """Structural type for request and response body streams."""

    @property
    def size(self) -> int | None: ...

    def read(self) -> bytes: ...

    def rewind(self) -> None: ...


class BufferedBody:
    """An in-memory body with a known byte size."""

    def __init__(self, content: bytes | str = b"") -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._content = content
        self._position = 0

    @property
    def size(self) -> int | None:
        return len(self._content)

    def read(self) -> bytes:
        remaining = self._content[self._position :]
        self._position = len(self._content)
        return remaining

    def rewind(self) -> None:
        self._position = 0


class StreamingBody:
    """
    A body backed by an iterable of byte chunks.

    The size is reported as ``None`` because it cannot be determined
    without buffering the whole stream.  Once consumed, the chunks are
    kept so that ``rewind()`` can replay them.
    """

    def __init__(self, chunks: collections.abc.Iterable[bytes] = ()) -> None:
        self._chunks = iter(chunks)
        self._consumed = b""
        self._exhausted = False
        self._position = 0

    @property
    def size(self) -> int | None:
        return None

    def read(self) -> bytes:
        if not self._exhausted:
            self._consumed += b"".join(self._chunks)
            self._exhausted = True
        remaining = self._consumed[self._position :]
        self._position = len(self._consumed)
        return remaining

    def rewind(self) -> None:
        self._position = 0


def _build_headers(
    headers: collections.abc.Mapping[str, str] | starlette.datastructures.Headers | None,
) -> starlette.datastructures.Headers:
    if isinstance(headers, starlette.datastructures.Headers):
        return headers
    return starlette.datastructures.Headers(headers=dict(headers or {}))


class _HttpMessage:
    """Behaviour shared by requests and responses: headers and body."""

    def __init__(
        self,
        headers: collections.abc.Mapping[str, str] | starlette.datastructures.Headers | None = None,
        body: MessageBody | None = None,
    ) -> None:
        self._headers = _build_headers(headers)
        self._body: MessageBody = body if body is not None else BufferedBody()

    @property
    def headers(self) -> starlette.datastructures.Headers:
        return self._headers

    @property
    def body(self) -> MessageBody:
        return self._body

    def has_header(self, name: str) -> bool:
        return name in self._headers

    def get_header_line(self, name: str) -> str:
        """Return all values of ``name`` joined by ``", "``, or ``""``."""
        return ", ".join(self._headers.getlist(name))

    def with_header(self, name: str, value: str) -> typing.Self:
        """Return a copy in which ``name`` is replaced by the single ``value``."""
        mutable_headers = self._headers.mutablecopy()
        mutable_headers[name] = value
        return self._copy_with(_headers=starlette.datastructures.Headers(raw=mutable_headers.raw))

    def with_added_header(self, name: str, value: str) -> typing.Self:
        """Return a copy with ``value`` appended to any existing ``name`` values."""
        mutable_headers = self._headers.mutablecopy()
        mutable_headers.append(name, value)
        return self._copy_with(_headers=starlette.datastructures.Headers(raw=mutable_headers.raw))

    def with_body(self, body: MessageBody) -> typing.Self:
        return self._copy_with(_body=body)

    def _copy_with(self, **changes: typing.Any) -> typing.Self:
        derived = copy.copy(self)
        for attribute_name, value in changes.items():
            setattr(derived, attribute_name, value)
        return derived


class ServerRequest(_HttpMessage):
    """
    An incoming HTTP request as seen by the helpers.

    Attributes are string-keyed values attached by middleware (for
    example ``rawBody``).  The parsed body has its own slot, exposed both
    as ``parsed_body`` and as the ``parsedBody`` attribute name through
    ``get_attribute``.
    """

    PARSED_BODY_ATTRIBUTE = "parsedBody"

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        headers: collections.abc.Mapping[str, str] | starlette.datastructures.Headers | None = None,
        body: MessageBody | None = None,
        attributes: collections.abc.Mapping[str, typing.Any] | None = None,
        parsed_body: typing.Any = None,
    ) -> None:
        super().__init__(headers=headers, body=body)
        self._method = method.upper()
        self._path = path
        self._attributes: dict[str, typing.Any] = dict(attributes or {})
        self._parsed_body = parsed_body

    @property
    def method(self) -> str:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def attributes(self) -> dict[str, typing.Any]:
        """A copy of the attribute mapping, parsed body included."""
        return {**self._attributes, self.PARSED_BODY_ATTRIBUTE: self._parsed_body}

    @property
    def parsed_body(self) -> typing.Any:
        return self._parsed_body

    def get_attribute(self, name: str, default: typing.Any = None) -> typing.Any:
        if name == self.PARSED_BODY_ATTRIBUTE:
            return self._parsed_body
        return self._attributes.get(name, default)

    def with_attribute(self, name: str, value: typing.Any) -> "ServerRequest":
        if name == self.PARSED_BODY_ATTRIBUTE:
            return self.with_parsed_body(value)
        return self._copy_with(_attributes={**self._attributes, name: value})

    def with_parsed_body(self, parsed_body: typing.Any) -> "ServerRequest":
        return self._copy_with(_parsed_body=parsed_body)


class Response(_HttpMessage):
    """An outgoing HTTP response as seen by the helpers."""

    def __init__(
        self,
        status_code: int = 200,
        headers: collections.abc.Mapping[str, str] | starlette.datastructures.Headers | None = None,
        body: MessageBody | None = None,
    ) -> None:
        super().__init__(headers=headers, body=body)
        self._status_code = status_code

    @property
    def status_code(self) -> int:
        return self._status_code

    def with_status(self, status_code: int) -> "Response":
        return self._copy_with(_status_code=status_code)
