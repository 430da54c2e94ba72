"""LLM result contracts and provider result converters."""

from __future__ import annotations

from .deepseek import (
    DeepSeekResultConverter,
    convert_stream,
    is_deepseek_error_payload,
    is_deepseek_tool_call_payload,
)
from .errors import (
    ContentFilterError,
    InvalidRequestError,
    PlatformError,
    ProviderError,
    ResponseFormatError,
)
from .models import Capability, DeepSeek, Model
from .raw import InMemoryRawResult, RawHttpResult, RawResult
from .results import (
    ConvertedResult,
    ResultConverter,
    StreamResult,
    TextResult,
    ThinkingContent,
    ToolCall,
    ToolCallResult,
)

__all__: list[str] = [
    "Capability",
    "ContentFilterError",
    "ConvertedResult",
    "DeepSeek",
    "DeepSeekResultConverter",
    "InMemoryRawResult",
    "InvalidRequestError",
    "Model",
    "PlatformError",
    "ProviderError",
    "RawHttpResult",
    "RawResult",
    "ResponseFormatError",
    "ResultConverter",
    "StreamResult",
    "TextResult",
    "ThinkingContent",
    "ToolCall",
    "ToolCallResult",
    "convert_stream",
    "is_deepseek_error_payload",
    "is_deepseek_tool_call_payload",
]
