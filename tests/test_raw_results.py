"""Tests for raw result handles and server-sent event decoding."""

from __future__ import annotations

import json

import pytest
from utils import FakeHttpResponse, content_event, sse_lines

from chatplatform.llm import InMemoryRawResult, RawHttpResult, ResponseFormatError
from chatplatform.llm.raw import iter_sse_data


def test_in_memory_result_defaults_to_empty_payloads() -> None:
    """Missing payloads behave as empty documents and streams."""
    raw = InMemoryRawResult()

    assert raw.get_data() == {}
    assert list(raw.get_data_stream()) == []


def test_sse_decoder_skips_comments_and_other_fields() -> None:
    """Only data fields contribute to event payloads."""
    lines = [
        ": keep-alive",
        "event: message",
        "id: 7",
        'data: {"a": 1}',
        "",
        "retry: 1000",
        "",
    ]

    assert list(iter_sse_data(lines)) == ['{"a": 1}']


def test_sse_decoder_joins_multi_line_data() -> None:
    """Consecutive data lines form one payload."""
    lines = ["data: {", 'data: "a": 1', "data: }", ""]

    assert list(iter_sse_data(lines)) == ['{\n"a": 1\n}']


def test_sse_decoder_stops_at_done_sentinel() -> None:
    """Nothing after the [DONE] sentinel is delivered."""
    lines = ["data: first", "", "data: [DONE]", "", "data: late", ""]

    assert list(iter_sse_data(lines)) == ["first"]


def test_sse_decoder_accepts_bytes_and_unterminated_events() -> None:
    """Byte lines are decoded and a trailing event is not lost."""
    lines: list[str | bytes] = [b"data:no-space\r\n", b"", b"data: tail"]

    assert list(iter_sse_data(lines)) == ["no-space", "tail"]


def test_http_result_decodes_stream_events() -> None:
    """Each SSE payload is decoded into a JSON document."""
    events = [content_event("Hello, "), content_event("world!")]
    raw = RawHttpResult(FakeHttpResponse(lines=sse_lines(events)))

    assert list(raw.get_data_stream()) == events


def test_http_result_stream_is_lazy() -> None:
    """Lines are read from the response only on demand."""
    response = FakeHttpResponse(lines=sse_lines([content_event("a"), content_event("b")]))
    stream = RawHttpResult(response).get_data_stream()

    assert response.lines_read == 0
    next(stream)
    assert response.lines_read == 2, "Expected one event worth of lines to be read."


@pytest.mark.parametrize("data", ["{broken", "[1, 2]"])
def test_http_result_rejects_invalid_event_data(data: str) -> None:
    """Event payloads must be JSON objects."""
    raw = RawHttpResult(FakeHttpResponse(lines=[f"data: {data}", ""]))

    with pytest.raises(ResponseFormatError, match=r"server-sent event|Server-sent"):
        list(raw.get_data_stream())


def test_http_result_exposes_wrapped_response() -> None:
    """The wrapped response remains accessible to callers."""
    response = FakeHttpResponse(body={"choices": []})

    raw = RawHttpResult(response)

    assert raw.response is response
    assert raw.get_data() == {"choices": []}


def test_sse_decoder_does_not_dispatch_empty_data() -> None:
    """Bare data lines used as keep-alives produce no payload."""
    lines = ["data:", "", *sse_lines([content_event("hi")], done=False), "data:"]

    assert [json.loads(payload) for payload in iter_sse_data(lines)] == [
        content_event("hi")
    ]


def test_http_result_skips_empty_data_keep_alives() -> None:
    """Keep-alive events do not break event decoding."""
    lines = ["data:", "", *sse_lines([content_event("hi")])]
    raw = RawHttpResult(FakeHttpResponse(lines=lines))

    assert list(raw.get_data_stream()) == [content_event("hi")]


def test_sse_decoder_yields_plain_json_body_whole() -> None:
    """A body without event framing is delivered as one payload."""
    lines = ["{", '  "error": {"code": "x"}', "}"]

    assert list(iter_sse_data(lines)) == ['{\n  "error": {"code": "x"}\n}']
