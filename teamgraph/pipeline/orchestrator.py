"""
Extraction orchestration.

A dispatcher: pick the extractor for the newest message's provenance, run
it, persist the result. Extraction failures degrade to an empty batch;
storage failures propagate.

    idle → extracting → persisted
    idle → extracting → failed_soft → idle
"""

from typing import Optional

import structlog

from ..agents.base import MessageExtractor
from ..schema.graph import GraphBatch
from ..schema.state import ExtractionStage, ExtractionState, Provenance
from ..store.base import GraphStore
from ..store.persistence import persist_batch

logger = structlog.get_logger()


class ExtractionOrchestrator:
    """Route extraction by provenance and drive extract → persist."""

    def __init__(self, store: GraphStore, extractors: dict[Provenance, MessageExtractor]) -> None:
        self.store = store
        self.extractors = extractors

    def select(self, provenance: Provenance) -> MessageExtractor:
        try:
            return self.extractors[provenance]
        except KeyError:
            raise ValueError(f"No extractor registered for provenance {provenance.value!r}") from None

    async def run(
        self,
        state: ExtractionState,
        provenance: Optional[Provenance] = None,
    ) -> GraphBatch:
        """
        Extract from the latest message in `state` and persist the result.

        Args:
            state: Conversation state; only its last message is read
            provenance: Force an extractor instead of the message's own tag

        Returns:
            The persisted batch (possibly empty)
        """
        message = state.last_message
        if message is None:
            return GraphBatch()

        extractor = self.select(provenance or message.provenance)
        state.advance_to(ExtractionStage.EXTRACTING)
        result = await extractor.extract(state)

        if not result.success:
            state.add_warning(f"{extractor.name} extraction failed: {'; '.join(result.errors)}")
            state.advance_to(ExtractionStage.FAILED_SOFT)
            state.advance_to(ExtractionStage.IDLE)
            return GraphBatch()

        batch = await persist_batch(self.store, result.output)
        state.apply_batch(batch)
        state.advance_to(ExtractionStage.PERSISTED)
        logger.info(
            "Extraction persisted",
            extractor=extractor.name,
            nodes=len(batch.nodes),
            edges=len(batch.edges),
        )
        return batch
