"""Model descriptors used to route responses to provider bindings."""

from __future__ import annotations

import dataclasses as dc
import enum

from chatplatform.config import deepseek_model_names_from_environment


class Capability(enum.StrEnum):
    """Features a model may support."""

    INPUT_MESSAGES = "input-messages"
    OUTPUT_TEXT = "output-text"
    OUTPUT_STREAMING = "output-streaming"
    TOOL_CALLING = "tool-calling"
    THINKING = "thinking"


@dc.dataclass(frozen=True, slots=True)
class Model:
    """A named model and its capabilities.

    Attributes
    ----------
    name : str
        Provider model identifier, for example ``"gpt-4"``.
    capabilities : frozenset[Capability]
        Features available for this model.
    """

    name: str
    capabilities: frozenset[Capability] = frozenset()

    def supports(self, capability: Capability) -> bool:
        """Return True when the model declares ``capability``."""
        return capability in self.capabilities


DEEPSEEK_CHAT = "deepseek-chat"
DEEPSEEK_REASONER = "deepseek-reasoner"

_CHAT_CAPABILITIES = frozenset({
    Capability.INPUT_MESSAGES,
    Capability.OUTPUT_TEXT,
    Capability.OUTPUT_STREAMING,
    Capability.TOOL_CALLING,
})
_REASONER_CAPABILITIES = _CHAT_CAPABILITIES | {Capability.THINKING}

_DEEPSEEK_CATALOG: dict[str, frozenset[Capability]] = {
    DEEPSEEK_CHAT: _CHAT_CAPABILITIES,
    DEEPSEEK_REASONER: _REASONER_CAPABILITIES,
}


def deepseek_catalog() -> dict[str, frozenset[Capability]]:
    """Return known DeepSeek model names mapped to their capabilities.

    Names registered through ``CHATPLATFORM_DEEPSEEK_MODELS`` are added with
    the chat capability set unless they are already known.
    """
    catalog = dict(_DEEPSEEK_CATALOG)
    for name in deepseek_model_names_from_environment():
        catalog.setdefault(name, _CHAT_CAPABILITIES)
    return catalog


@dc.dataclass(frozen=True, slots=True)
class DeepSeek(Model):
    """A model from the DeepSeek family.

    Capabilities default to the catalog entry for ``name``; names missing
    from the catalog get the chat capability set.
    """

    def __post_init__(self) -> None:
        if not self.capabilities:
            capabilities = deepseek_catalog().get(self.name, _CHAT_CAPABILITIES)
            object.__setattr__(self, "capabilities", capabilities)


__all__ = [
    "DEEPSEEK_CHAT",
    "DEEPSEEK_REASONER",
    "Capability",
    "DeepSeek",
    "Model",
    "deepseek_catalog",
]
