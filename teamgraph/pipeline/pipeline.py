"""
Main knowledge pipeline.

Exposes the operations the HTTP layer calls:
- extract_from_chat / extract_from_calendar_event / extract_from_sticky
- retrieve_subgraph
- link_stickies_to_tasks
- sync_calendar and get_graph
"""

from typing import Iterable, Optional

import structlog

from ..agents.base import CompletionClient, LiteLLMClient
from ..agents.calendar_extractor import CalendarExtractor
from ..agents.chat_extractor import ChatExtractor
from ..agents.sticky_extractor import StickyExtractor
from ..config import PipelineConfig
from ..linking.sticky_linker import StickyTaskLinker
from ..schema.graph import GraphBatch, SubgraphResult
from ..schema.state import ExtractionState, Provenance
from ..store.base import GraphStore
from ..store.mongo import MongoGraphStore
from ..traversal.engine import GraphTraversalEngine
from .events import CalendarEvent, calendar_event_state
from .orchestrator import ExtractionOrchestrator

logger = structlog.get_logger()


class KnowledgePipeline:
    """
    Knowledge extraction and retrieval pipeline.

    The completion client and the graph store are injected; when omitted
    they are built from the config (LiteLLM and MongoDB).
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        client: Optional[CompletionClient] = None,
        store: Optional[GraphStore] = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration
            client: Completion service used by the LLM extractors
            store: Graph store shared by persistence, traversal and linking
        """
        self.config = config or PipelineConfig()

        if client is None:
            client = LiteLLMClient(
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                timeout=self.config.request_timeout,
            )
        if store is None:
            store = MongoGraphStore.from_config(self.config)

        self.client = client
        self.store = store

        # Initialize components
        self.orchestrator = ExtractionOrchestrator(
            store,
            {
                Provenance.CHAT: ChatExtractor(client),
                Provenance.CALENDAR: CalendarExtractor(client),
                Provenance.WHITEBOARD: StickyExtractor(),
            },
        )
        self.traversal = GraphTraversalEngine(
            store,
            max_forward_depth=self.config.max_forward_depth,
        )
        self.linker = StickyTaskLinker(store)

    async def extract(self, state: ExtractionState) -> GraphBatch:
        """Extract using the provenance of the latest message."""
        return await self.orchestrator.run(state)

    async def extract_from_chat(self, state: ExtractionState) -> GraphBatch:
        """Extract from the latest chat turn and persist the result."""
        return await self.orchestrator.run(state, Provenance.CHAT)

    async def extract_from_calendar_event(self, state: ExtractionState) -> GraphBatch:
        """Extract from a state wrapping one formatted calendar event."""
        return await self.orchestrator.run(state, Provenance.CALENDAR)

    async def extract_from_sticky(self, state: ExtractionState) -> GraphBatch:
        """Record a whiteboard sticky as a Sticky node."""
        return await self.orchestrator.run(state, Provenance.WHITEBOARD)

    async def retrieve_subgraph(self, state: ExtractionState) -> SubgraphResult:
        """Traverse from `state.intent` and store the result on the state."""
        result = await self.traversal.retrieve(state)
        state.search_results = result
        return result

    async def link_stickies_to_tasks(self, state: ExtractionState) -> GraphBatch:
        """Create a Kanban card for every Sticky in `state.knowledge_nodes`."""
        batch = await self.linker.link(state)
        state.apply_batch(batch)
        return batch

    async def sync_calendar(self, events: Iterable[CalendarEvent]) -> int:
        """
        Run calendar extraction over `events`, one fresh state per event.

        Returns:
            Number of events processed
        """
        processed = 0
        for event in events:
            await self.extract_from_calendar_event(calendar_event_state(event))
            processed += 1
        logger.info("Calendar sync finished", processed=processed)
        return processed

    async def get_graph(self, show_calendar: bool = False) -> GraphBatch:
        """
        Snapshot of the stored graph.

        Calendar-sourced nodes are hidden unless `show_calendar`. Edges are
        returned unfiltered, including ones pointing at hidden nodes.
        """
        exclude = None if show_calendar else Provenance.CALENDAR.value
        nodes = await self.store.list_nodes(exclude_source=exclude)
        edges = await self.store.list_edges()
        return GraphBatch(nodes=nodes, edges=edges)
