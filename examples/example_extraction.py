"""
Example: Extract a knowledge graph from team events and query it.

Uses the configured LiteLLM model with an in-memory graph store, so only
model credentials are needed (see .env / TEAMGRAPH_MODEL).
"""

import asyncio

from teamgraph.config import PipelineConfig
from teamgraph.logging_config import configure_logging
from teamgraph.pipeline import CalendarEvent, KnowledgePipeline, chat_state, sticky_state
from teamgraph.schema.state import SEARCH_INTENT
from teamgraph.store.memory import InMemoryGraphStore


async def main():
    """Run example extraction."""
    config = PipelineConfig.from_env()
    configure_logging(config.log_level, config.log_format)

    store = InMemoryGraphStore()
    pipeline = KnowledgePipeline(config=config, store=store)

    # Chat turn
    state = chat_state("We need to fix the login bug by tomorrow's meeting. Let's move auth to Next.js.")
    batch = await pipeline.extract_from_chat(state)
    print(f"Chat: {batch.summary()}")

    # Calendar event
    await pipeline.sync_calendar(
        [
            CalendarEvent(
                id="evt-42",
                title="Sprint Review",
                start="2026-03-02T10:00:00Z",
                end="2026-03-02T11:00:00Z",
                description="DECISION: ship dark mode in v2",
                participants=["ana@example.com", "li@example.com"],
            )
        ]
    )

    # Whiteboard sticky, then turn it into a task
    sticky = sticky_state("note-7", "Add rate limiting to the public API", room_id="room-1")
    await pipeline.extract_from_sticky(sticky)
    cards = await pipeline.link_stickies_to_tasks(sticky)
    print(f"Linker: {cards.summary()}")

    # Query around the first node extracted from chat
    state.intent = SEARCH_INTENT
    result = await pipeline.retrieve_subgraph(state)
    print(f"\n{result.summary()}")
    for edge in result.edges:
        print(f"  - {edge.source} --[{edge.type.value}]--> {edge.target}")

    print(f"\n{store.summary()}")


if __name__ == "__main__":
    asyncio.run(main())
