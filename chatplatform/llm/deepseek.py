"""DeepSeek result conversion with explicit payload validation.

This module classifies DeepSeek error envelopes and converts chat completion
payloads into provider-agnostic results. Streaming responses are converted
lazily: reasoning deltas are coalesced into ``ThinkingContent`` blocks,
visible text deltas pass through unchanged, and streamed tool-call fragments
are assembled into a single ``ToolCallResult``.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import typing as typ

from chatplatform.llm.errors import ResponseFormatError, classify_provider_error
from chatplatform.llm.models import DeepSeek
from chatplatform.llm.results import (
    StreamFragment,
    StreamResult,
    TextResult,
    ThinkingContent,
    ToolCall,
    ToolCallResult,
)
from chatplatform.logging import get_logger, log_debug, log_warning

if typ.TYPE_CHECKING:
    from chatplatform.llm.models import Model
    from chatplatform.llm.raw import RawResult
    from chatplatform.llm.results import ConvertedResult, ConverterOptions

logger = get_logger(__name__)

_MISSING_CHOICES_MESSAGE = (
    "Invalid DeepSeek chat completion payload. Expected an error object or a "
    "non-empty choices list."
)
_MISSING_MESSAGE_MESSAGE = (
    "Invalid DeepSeek chat completion payload. choices[0].message must be an "
    "object."
)
_MISSING_CONTENT_MESSAGE = (
    "Invalid DeepSeek chat completion payload. choices[0].message.content must "
    "be a string when no tool calls are present."
)
_INVALID_TOOL_CALL_MESSAGE = (
    "Invalid DeepSeek tool call. Expected string id and function.name values."
)
_UNKNOWN_ERROR_MESSAGE = "Unknown DeepSeek error."


def _is_string_keyed_mapping(value: object) -> bool:
    """Check whether a value is a mapping with string keys."""
    return isinstance(value, cabc.Mapping) and all(
        isinstance(candidate_key, str) for candidate_key in value
    )


def _as_mapping(value: object) -> cabc.Mapping[str, object]:
    """Return ``value`` as a mapping, or an empty mapping for other shapes."""
    if _is_string_keyed_mapping(value):
        return typ.cast("cabc.Mapping[str, object]", value)
    return {}


def _non_empty_string(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def is_deepseek_error_payload(payload: object) -> bool:
    """Return True when ``payload`` carries a top-level error envelope."""
    return _is_string_keyed_mapping(payload) and _is_string_keyed_mapping(
        typ.cast("cabc.Mapping[str, object]", payload).get("error")
    )


def is_deepseek_tool_call_payload(payload: object) -> bool:
    """Validate one entry of ``message.tool_calls``.

    Parameters
    ----------
    payload : object
        Candidate tool call payload.

    Returns
    -------
    bool
        ``True`` when the entry has a string ``id`` and a ``function`` object
        with a string ``name``.
    """
    if not _is_string_keyed_mapping(payload):
        return False
    payload_mapping = typ.cast("cabc.Mapping[str, object]", payload)
    function = payload_mapping.get("function")
    if not isinstance(payload_mapping.get("id"), str):
        return False
    if not _is_string_keyed_mapping(function):
        return False
    return isinstance(typ.cast("cabc.Mapping[str, object]", function).get("name"), str)


def _raise_for_error(payload: cabc.Mapping[str, object]) -> None:
    """Raise the classified error for a payload carrying an error envelope."""
    if not is_deepseek_error_payload(payload):
        return
    error = typ.cast("cabc.Mapping[str, object]", payload["error"])
    code = error.get("code")
    message = error.get("message")
    exc = classify_provider_error(
        code if isinstance(code, str) else None,
        message if isinstance(message, str) else _UNKNOWN_ERROR_MESSAGE,
    )
    log_warning(logger, "DeepSeek returned error %s: %s", exc.code, exc.message)
    raise exc


def _decode_arguments(arguments: object) -> cabc.Mapping[str, object]:
    """Decode a JSON-encoded tool-call argument string into a mapping."""
    if arguments is None or (isinstance(arguments, str) and not arguments.strip()):
        return {}
    if not isinstance(arguments, str):
        msg = "Invalid DeepSeek tool call. function.arguments must be a string."
        raise ResponseFormatError(msg)
    try:
        decoded = json.loads(arguments)
    except json.JSONDecodeError as err:
        msg = f"Invalid DeepSeek tool call arguments: {arguments!r}"
        raise ResponseFormatError(msg) from err
    if not _is_string_keyed_mapping(decoded):
        msg = f"DeepSeek tool call arguments must be a JSON object: {arguments!r}"
        raise ResponseFormatError(msg)
    return typ.cast("cabc.Mapping[str, object]", decoded)


def _convert_tool_call(payload: object) -> ToolCall:
    if not is_deepseek_tool_call_payload(payload):
        raise ResponseFormatError(_INVALID_TOOL_CALL_MESSAGE)
    payload_mapping = typ.cast("cabc.Mapping[str, object]", payload)
    function = typ.cast("cabc.Mapping[str, object]", payload_mapping["function"])
    return ToolCall(
        id=typ.cast("str", payload_mapping["id"]),
        name=typ.cast("str", function["name"]),
        arguments=_decode_arguments(function.get("arguments")),
    )


def _first_choice(payload: cabc.Mapping[str, object]) -> cabc.Mapping[str, object]:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ResponseFormatError(_MISSING_CHOICES_MESSAGE)
    return _as_mapping(choices[0])


def _convert_message(payload: cabc.Mapping[str, object]) -> TextResult | ToolCallResult:
    """Convert the first choice of a buffered chat completion."""
    message = _first_choice(payload).get("message")
    if not _is_string_keyed_mapping(message):
        raise ResponseFormatError(_MISSING_MESSAGE_MESSAGE)
    message_mapping = typ.cast("cabc.Mapping[str, object]", message)

    tool_calls = message_mapping.get("tool_calls")
    if isinstance(tool_calls, list) and tool_calls:
        return ToolCallResult(tuple(_convert_tool_call(entry) for entry in tool_calls))

    content = message_mapping.get("content")
    if not isinstance(content, str):
        raise ResponseFormatError(_MISSING_CONTENT_MESSAGE)
    return TextResult(content)


@dc.dataclass(frozen=True, slots=True)
class _PendingToolCall:
    """Tool call assembled from streamed fragments."""

    index: int
    id: str = ""
    name: str = ""
    arguments: str = ""

    def to_tool_call(self) -> ToolCall:
        return ToolCall(
            id=self.id,
            name=self.name,
            arguments=_decode_arguments(self.arguments),
        )


@dc.dataclass(frozen=True, slots=True)
class _StreamState:
    """Conversion state carried between stream events.

    ``thinking`` is None while idle and holds the buffered reasoning text
    while accumulating a thought.
    """

    thinking: str | None = None
    tool_calls: tuple[_PendingToolCall, ...] = ()


_IDLE = _StreamState()


def _merge_tool_call_deltas(
    pending: tuple[_PendingToolCall, ...],
    deltas: list[object],
) -> tuple[_PendingToolCall, ...]:
    """Fold streamed tool-call fragments into the pending calls by index."""
    calls = {call.index: call for call in pending}
    for position, delta in enumerate(deltas):
        delta_mapping = _as_mapping(delta)
        raw_index = delta_mapping.get("index")
        index = raw_index if isinstance(raw_index, int) else position
        function = _as_mapping(delta_mapping.get("function"))
        current = calls.get(index, _PendingToolCall(index=index))
        fragment = function.get("arguments")
        calls[index] = dc.replace(
            current,
            id=_non_empty_string(delta_mapping.get("id")) or current.id,
            name=_non_empty_string(function.get("name")) or current.name,
            arguments=current.arguments + (fragment if isinstance(fragment, str) else ""),
        )
    return tuple(sorted(calls.values(), key=lambda call: call.index))


def _flush(state: _StreamState) -> tuple[_StreamState, list[StreamFragment]]:
    """Emit whichever of buffered reasoning or assembled tool calls is pending.

    A new reasoning, text or tool-call run flushes the other kinds first, so
    at most one of the two is pending here.
    """
    state, thinking = _flush_thinking(state)
    state, tool_calls = _flush_tool_calls(state)
    return (state, thinking + tool_calls)


def _flush_thinking(state: _StreamState) -> tuple[_StreamState, list[StreamFragment]]:
    if state.thinking is None:
        return (state, [])
    return (
        dc.replace(state, thinking=None),
        [ThinkingContent(thinking=state.thinking)],
    )


def _flush_tool_calls(
    state: _StreamState,
) -> tuple[_StreamState, list[StreamFragment]]:
    if not state.tool_calls:
        return (state, [])
    return (
        dc.replace(state, tool_calls=()),
        [ToolCallResult(tuple(call.to_tool_call() for call in state.tool_calls))],
    )


def _advance(
    state: _StreamState,
    event: cabc.Mapping[str, object],
) -> tuple[_StreamState, list[StreamFragment]]:
    """Apply one stream event to ``state``.

    Returns
    -------
    tuple[_StreamState, list[StreamFragment]]
        The next state and the fragments ready for the caller.
    """
    _raise_for_error(event)
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices:
        return (state, [])
    choice = _as_mapping(choices[0])
    delta = _as_mapping(choice.get("delta"))
    fragments: list[StreamFragment] = []

    reasoning = _non_empty_string(delta.get("reasoning_content"))
    if reasoning is not None:
        state, flushed = _flush_tool_calls(state)
        fragments.extend(flushed)
        state = dc.replace(state, thinking=(state.thinking or "") + reasoning)

    content = _non_empty_string(delta.get("content"))
    if content is not None:
        state, flushed = _flush_tool_calls(state)
        fragments.extend(flushed)
        state, flushed = _flush_thinking(state)
        fragments.extend(flushed)
        fragments.append(content)

    tool_call_deltas = delta.get("tool_calls")
    if isinstance(tool_call_deltas, list) and tool_call_deltas:
        state, flushed = _flush_thinking(state)
        fragments.extend(flushed)
        state = dc.replace(
            state,
            tool_calls=_merge_tool_call_deltas(state.tool_calls, tool_call_deltas),
        )

    if isinstance(choice.get("finish_reason"), str):
        state, flushed = _flush(state)
        fragments.extend(flushed)
    return (state, fragments)


def convert_stream(
    events: cabc.Iterable[cabc.Mapping[str, object]],
) -> cabc.Iterator[StreamFragment]:
    """Lazily convert DeepSeek stream events into fragments.

    Parameters
    ----------
    events : Iterable[Mapping[str, object]]
        Decoded event documents in arrival order.

    Yields
    ------
    StreamFragment
        Plain text, ``ThinkingContent`` or ``ToolCallResult`` fragments.

    Raises
    ------
    ProviderError
        When an event carries an error envelope.
    """
    state = _IDLE
    for event in events:
        state, fragments = _advance(state, event)
        yield from fragments
    _, fragments = _flush(state)
    yield from fragments


class DeepSeekResultConverter:
    """Result converter for DeepSeek chat completion responses."""

    def supports(self, model: Model) -> bool:
        """Return True for models of the DeepSeek family."""
        return isinstance(model, DeepSeek)

    def convert(
        self,
        raw_result: RawResult,
        options: ConverterOptions | None = None,
    ) -> ConvertedResult:
        """Convert a DeepSeek response into a typed result.

        Raises
        ------
        ContentFilterError
            When the provider filtered the content.
        InvalidRequestError
            When the provider rejected the request.
        ProviderError
            For any other error envelope.
        ResponseFormatError
            When the payload shape is not recognized.
        """
        if options is not None and options.get("stream"):
            log_debug(logger, "Converting DeepSeek stream response")
            return StreamResult(convert_stream(raw_result.get_data_stream()))

        payload = raw_result.get_data()
        _raise_for_error(payload)
        result = _convert_message(payload)
        log_debug(logger, "Converted DeepSeek response into %s result", result.kind)
        return result


__all__ = [
    "DeepSeekResultConverter",
    "convert_stream",
    "is_deepseek_error_payload",
    "is_deepseek_tool_call_payload",
]
