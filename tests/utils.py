"""Shared payload builders and fakes for result conversion tests."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import typing as typ


@dc.dataclass(slots=True)
class FakeHttpResponse:
    """HTTP response double exposing ``json()`` and ``iter_lines()``."""

    body: object = None
    lines: list[str | bytes] = dc.field(default_factory=list)
    lines_read: int = 0

    def json(self) -> object:
        return self.body

    def iter_lines(self) -> cabc.Iterator[str | bytes]:
        for line in self.lines:
            self.lines_read += 1
            yield line


def reasoning_event(text: str) -> dict[str, typ.Any]:
    """Build a stream event carrying a reasoning delta."""
    return {"choices": [{"index": 0, "delta": {"reasoning_content": text}}]}


def content_event(text: str) -> dict[str, typ.Any]:
    """Build a stream event carrying a visible text delta."""
    return {"choices": [{"index": 0, "delta": {"content": text}}]}


def finish_event(reason: str = "stop") -> dict[str, typ.Any]:
    """Build the terminating stream event."""
    return {"choices": [{"index": 0, "delta": {}, "finish_reason": reason}]}


def sse_lines(events: cabc.Iterable[object], *, done: bool = True) -> list[str]:
    """Encode events as server-sent event lines."""
    lines: list[str] = []
    for event in events:
        lines.extend([f"data: {json.dumps(event)}", ""])
    if done:
        lines.extend(["data: [DONE]", ""])
    return lines
