"""Raw provider response handles consumed by result converters.

A raw result exposes either one buffered JSON document or a lazy sequence of
JSON event documents. ``RawHttpResult`` decodes server-sent events from an
HTTP response; ``InMemoryRawResult`` serves pre-built payloads.
"""

from __future__ import annotations

import collections.abc as cabc
import json
import typing as typ

from chatplatform.llm.errors import ResponseFormatError

SSE_DATA_FIELD = "data"
SSE_DONE_SENTINEL = "[DONE]"


class RawResult(typ.Protocol):
    """Protocol for buffered or streaming provider responses."""

    def get_data(self) -> cabc.Mapping[str, object]:
        """Return the buffered response document."""
        ...

    def get_data_stream(self) -> cabc.Iterator[cabc.Mapping[str, object]]:
        """Return the streamed event documents in arrival order."""
        ...


class HttpResponse(typ.Protocol):
    """Structural type for the HTTP responses wrapped by ``RawHttpResult``."""

    def json(self) -> object: ...

    def iter_lines(self) -> cabc.Iterator[str | bytes]: ...


class InMemoryRawResult:
    """Raw result backed by payloads already held in memory.

    Parameters
    ----------
    data : Mapping[str, object] | None
        Buffered response document.
    data_stream : Iterable[Mapping[str, object]] | None
        Event documents served by ``get_data_stream``.
    """

    def __init__(
        self,
        data: cabc.Mapping[str, object] | None = None,
        data_stream: cabc.Iterable[cabc.Mapping[str, object]] | None = None,
    ) -> None:
        self._data = data if data is not None else {}
        self._data_stream = data_stream if data_stream is not None else ()

    def get_data(self) -> cabc.Mapping[str, object]:
        return self._data

    def get_data_stream(self) -> cabc.Iterator[cabc.Mapping[str, object]]:
        yield from self._data_stream


def _decode_line(line: str | bytes) -> str:
    text = line.decode("utf-8") if isinstance(line, bytes) else line
    return text.rstrip("\r\n")


def _parse_field(line: str) -> tuple[str, str]:
    """Split one SSE line into its field name and value."""
    name, separator, value = line.partition(":")
    if not separator:
        return (name, "")
    if value.startswith(" "):
        value = value[1:]
    return (name, value)


def _decode_event(data: str) -> cabc.Mapping[str, object]:
    try:
        document = json.loads(data)
    except json.JSONDecodeError as err:
        msg = f"Invalid JSON in server-sent event: {data!r}"
        raise ResponseFormatError(msg) from err
    if not isinstance(document, cabc.Mapping):
        msg = f"Server-sent event data must be a JSON object: {data!r}"
        raise ResponseFormatError(msg)
    return typ.cast("cabc.Mapping[str, object]", document)


def iter_sse_data(lines: cabc.Iterable[str | bytes]) -> cabc.Iterator[str]:
    """Yield the data payload of each server-sent event.

    Multi-line ``data`` fields are joined with newlines and events with an
    empty data buffer are not dispatched. Comment lines and fields other than
    ``data`` are ignored. Iteration stops at the ``[DONE]`` sentinel.

    A body that opens with a JSON object instead of an event, as sent with
    HTTP error responses, is yielded whole as a single payload.
    """
    lines_iter = iter(lines)
    buffer: list[str] = []
    seen_event = False
    for raw_line in lines_iter:
        line = _decode_line(raw_line)
        if not line:
            payload = "\n".join(buffer)
            buffer = []
            if payload == SSE_DONE_SENTINEL:
                return
            if payload:
                yield payload
            continue
        if not seen_event and line.lstrip().startswith("{"):
            rest = [_decode_line(raw_rest) for raw_rest in lines_iter]
            yield "\n".join([line, *rest])
            return
        seen_event = True
        if line.startswith(":"):
            continue
        name, value = _parse_field(line)
        if name == SSE_DATA_FIELD:
            buffer.append(value)
    payload = "\n".join(buffer)
    if payload and payload != SSE_DONE_SENTINEL:
        yield payload


class RawHttpResult:
    """Raw result wrapping an HTTP response.

    Parameters
    ----------
    response : HttpResponse
        Response object exposing ``json()`` for buffered bodies and
        ``iter_lines()`` for event streams.
    """

    def __init__(self, response: HttpResponse) -> None:
        self._response = response

    @property
    def response(self) -> HttpResponse:
        """Return the wrapped HTTP response."""
        return self._response

    def get_data(self) -> cabc.Mapping[str, object]:
        document = self._response.json()
        if not isinstance(document, cabc.Mapping):
            msg = "Response body must be a JSON object."
            raise ResponseFormatError(msg)
        return typ.cast("cabc.Mapping[str, object]", document)

    def get_data_stream(self) -> cabc.Iterator[cabc.Mapping[str, object]]:
        for data in iter_sse_data(self._response.iter_lines()):
            yield _decode_event(data)


__all__ = [
    "HttpResponse",
    "InMemoryRawResult",
    "RawHttpResult",
    "RawResult",
    "iter_sse_data",
]
