"""Result contracts for provider response conversion.

This module defines the provider-agnostic result objects produced by result
converters and the converter protocol that provider bindings implement.
Results form a tagged union: each variant carries a literal ``kind`` so
callers can branch on exactly which result was produced.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from chatplatform.llm.models import Model
    from chatplatform.llm.raw import RawResult


@dc.dataclass(frozen=True, slots=True)
class ToolCall:
    """A single function invocation requested by the model.

    Attributes
    ----------
    id : str
        Provider-assigned call identifier.
    name : str
        Name of the function to invoke.
    arguments : Mapping[str, object]
        Decoded call arguments. Not part of the hash.
    """

    id: str
    name: str
    arguments: cabc.Mapping[str, object] = dc.field(default_factory=dict, hash=False)


@dc.dataclass(frozen=True, slots=True)
class ThinkingContent:
    """Reasoning text emitted separately from the visible answer.

    Attributes
    ----------
    thinking : str
        Accumulated reasoning text.
    signature : str | None
        Provider signature for the reasoning block, when one is supplied.
    """

    thinking: str
    signature: str | None = None


@dc.dataclass(frozen=True, slots=True)
class TextResult:
    """Final assistant message text."""

    content: str
    kind: typ.Literal["text"] = dc.field(default="text", init=False)


@dc.dataclass(frozen=True, slots=True)
class ToolCallResult:
    """One or more tool calls, ordered as in the provider payload."""

    content: tuple[ToolCall, ...]
    kind: typ.Literal["tool_calls"] = dc.field(default="tool_calls", init=False)


StreamFragment: typ.TypeAlias = str | ThinkingContent | ToolCallResult


class StreamResult:
    """Single-pass sequence of streamed fragments.

    Fragments are plain text strings, ``ThinkingContent`` blocks, or a
    ``ToolCallResult`` for tool calls assembled from the stream. The
    underlying iterator is consumed once; iterating an exhausted result
    yields nothing.
    """

    kind: typ.Literal["stream"] = "stream"

    __slots__ = ("_fragments",)

    def __init__(self, fragments: cabc.Iterable[StreamFragment]) -> None:
        self._fragments = iter(fragments)

    @property
    def content(self) -> cabc.Iterator[StreamFragment]:
        """Return the fragment iterator shared by every caller."""
        return self._fragments

    def __iter__(self) -> cabc.Iterator[StreamFragment]:
        return self._fragments


ConvertedResult: typ.TypeAlias = TextResult | ToolCallResult | StreamResult


class ConverterOptions(typ.TypedDict, total=False):
    """Options accepted by ``ResultConverter.convert``."""

    stream: bool


class ResultConverter(typ.Protocol):
    """Protocol for provider-specific result converters."""

    def supports(self, model: Model) -> bool:
        """Return True when this converter handles responses for ``model``."""
        ...

    def convert(
        self,
        raw_result: RawResult,
        options: ConverterOptions | None = None,
    ) -> ConvertedResult:
        """Convert a raw provider response into a typed result.

        Parameters
        ----------
        raw_result : RawResult
            Buffered or streaming provider response.
        options : ConverterOptions | None
            Conversion options. ``stream`` selects streaming conversion.

        Returns
        -------
        ConvertedResult
            Exactly one text, tool-call or stream result.
        """
        ...


__all__ = [
    "ConvertedResult",
    "ConverterOptions",
    "ResultConverter",
    "StreamFragment",
    "StreamResult",
    "TextResult",
    "ThinkingContent",
    "ToolCall",
    "ToolCallResult",
]
