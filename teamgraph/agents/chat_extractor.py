"""
Chat extraction agent.

Extracts Decision, Feature, Bug, Tech, Meeting and Person nodes from a
human chat turn. The instruction is permissive:
every technical term and every implied goal becomes a node.
"""

from ..extraction.prompts import CHAT_SYSTEM_PROMPT, build_chat_prompt
from ..schema.graph import GraphBatch
from ..schema.state import Message, Provenance
from .base import BaseExtractor


class ChatExtractor(BaseExtractor):
    """Extract a knowledge batch from the latest human chat message."""

    name = "chat"

    def get_system_prompt(self, message: Message) -> str:
        return CHAT_SYSTEM_PROMPT

    def format_input(self, message: Message) -> str:
        return build_chat_prompt(message.content)

    def accepts(self, message: Message) -> bool:
        # Assistant and system turns are never mined for knowledge
        return message.is_human

    def postprocess(self, batch: GraphBatch, message: Message) -> GraphBatch:
        for node in batch.nodes:
            node.metadata.setdefault("source", Provenance.CHAT.value)
        return batch
