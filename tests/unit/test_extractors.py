"""
Tests for the chat, calendar and sticky extractors.
"""

import json

import pytest

from teamgraph.agents.calendar_extractor import CalendarExtractor, parse_calendar_message
from teamgraph.agents.chat_extractor import ChatExtractor
from teamgraph.agents.sticky_extractor import StickyExtractor
from teamgraph.errors import ModelServiceError
from teamgraph.extraction.prompts import (
    CHAT_EXAMPLE_INPUT,
    CHAT_EXAMPLE_OUTPUT,
    CHAT_SYSTEM_PROMPT,
)
from teamgraph.pipeline.events import CalendarEvent, calendar_event_state, chat_state, sticky_state
from teamgraph.schema.edges import EdgeType
from teamgraph.schema.nodes import NodeType
from teamgraph.schema.state import ExtractionState, Message

from tests.conftest import StubCompletionClient

SYNCED_AT = "2026-03-01T09:00:00.000Z"


def fixed_clock() -> str:
    return SYNCED_AT


def make_event(**overrides) -> CalendarEvent:
    fields = dict(
        id="evt-42",
        title="Sprint Review",
        start="2026-03-02T10:00:00Z",
        end="2026-03-02T11:00:00Z",
        description="Demo of the new board",
        participants=["ana@example.com", "li@example.com"],
    )
    fields.update(overrides)
    return CalendarEvent(**fields)


class TestChatExtractor:
    """Tests for ChatExtractor."""

    @pytest.mark.asyncio
    async def test_example_scenario(self):
        """Test the worked example from the prompt round-trips."""
        client = StubCompletionClient(CHAT_EXAMPLE_OUTPUT)
        extractor = ChatExtractor(client)

        result = await extractor.extract(chat_state(CHAT_EXAMPLE_INPUT))

        assert result.success
        nodes = {n.id: n for n in result.output.nodes}
        assert nodes["bug-login"].type == NodeType.BUG
        assert nodes["meeting-tomorrow"].type == NodeType.MEETING
        assert len(result.output.edges) == 1
        edge = result.output.edges[0]
        assert (edge.source, edge.target, edge.type) == (
            "bug-login",
            "meeting-tomorrow",
            EdgeType.SCHEDULED_FOR,
        )
        assert nodes["bug-login"].metadata["source"] == "chat"

    @pytest.mark.asyncio
    async def test_prompt_contents(self):
        """Test the chat prompt carries the message, types and example."""
        client = StubCompletionClient()
        await ChatExtractor(client).extract(chat_state("Switch the API to FastAPI"))

        system_prompt, user_prompt = client.calls[0]
        assert system_prompt == CHAT_SYSTEM_PROMPT
        assert '"Switch the API to FastAPI"' in user_prompt
        assert "CREATE A NODE" in user_prompt
        assert "SCHEDULED_FOR" in user_prompt
        assert CHAT_EXAMPLE_OUTPUT in user_prompt

    @pytest.mark.asyncio
    async def test_only_latest_message_used(self):
        """Test earlier turns are not sent to the model."""
        client = StubCompletionClient()
        state = chat_state("second", history=[Message(content="first")])
        await ChatExtractor(client).extract(state)

        assert len(client.calls) == 1
        assert '"second"' in client.calls[0][1]
        assert '"first"' not in client.calls[0][1]

    @pytest.mark.asyncio
    async def test_non_human_turn_skipped(self):
        """Test assistant turns are not extracted."""
        client = StubCompletionClient(CHAT_EXAMPLE_OUTPUT)
        result = await ChatExtractor(client).extract(chat_state("Sure, noted.", role="ai"))

        assert result.success
        assert result.output.is_empty()
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_empty_conversation(self):
        """Test a state without messages yields nothing."""
        result = await ChatExtractor(StubCompletionClient()).extract(ExtractionState())
        assert result.output.is_empty()

    @pytest.mark.asyncio
    async def test_model_failure_fails_open(self):
        """Test a service failure becomes an empty, unsuccessful result."""
        client = StubCompletionClient(ModelServiceError("quota exceeded"))
        result = await ChatExtractor(client).extract(chat_state("hello"))

        assert not result.success
        assert result.output.is_empty()
        assert "quota exceeded" in result.errors[0]

    @pytest.mark.asyncio
    async def test_malformed_output(self):
        """Test non-JSON output is a soft failure with an empty batch."""
        client = StubCompletionClient("Sorry, I can't help with that.")
        result = await ChatExtractor(client).extract(chat_state("hello"))

        assert not result.success
        assert result.errors == ["model output is not a JSON object"]
        assert result.output.is_empty()


class TestCalendarExtractor:
    """Tests for CalendarExtractor."""

    @pytest.mark.asyncio
    async def test_meeting_id_is_deterministic(self):
        """Test the Meeting node id always derives from the event id."""
        response = json.dumps(
            {
                "nodes": [
                    {"id": "meeting-sprint-review", "type": "Meeting", "content": "Sprint Review"},
                    {"id": "person-ana", "type": "Person", "content": "ana@example.com"},
                ],
                "edges": [
                    {"source": "person-ana", "target": "meeting-sprint-review", "type": "RELATES_TO"}
                ],
            }
        )
        extractor = CalendarExtractor(StubCompletionClient(response), clock=fixed_clock)

        result = await extractor.extract(calendar_event_state(make_event()))

        nodes = {n.id: n for n in result.output.nodes}
        assert set(nodes) == {"meeting-evt-42", "person-ana"}
        assert nodes["meeting-evt-42"].type == NodeType.MEETING
        for node in nodes.values():
            assert node.metadata == {
                "source": "calendar",
                "eventId": "evt-42",
                "syncedAt": SYNCED_AT,
            }
        assert result.output.edges[0].target == "meeting-evt-42"

    @pytest.mark.asyncio
    async def test_missing_meeting_is_synthesized(self):
        """Test the Meeting node is created when the model omits it."""
        extractor = CalendarExtractor(StubCompletionClient('{"nodes": [], "edges": []}'), clock=fixed_clock)

        result = await extractor.extract(calendar_event_state(make_event()))

        assert len(result.output.nodes) == 1
        meeting = result.output.nodes[0]
        assert meeting.id == "meeting-evt-42"
        assert meeting.content == "Sprint Review (2026-03-02T10:00:00Z - 2026-03-02T11:00:00Z)"
        assert meeting.metadata["source"] == "calendar"

    @pytest.mark.asyncio
    async def test_unparseable_output_is_empty(self):
        """Test no Meeting node is synthesized when the output is not JSON."""
        extractor = CalendarExtractor(StubCompletionClient("I cannot do that."), clock=fixed_clock)

        result = await extractor.extract(calendar_event_state(make_event()))

        assert not result.success
        assert result.output.is_empty()

    @pytest.mark.asyncio
    async def test_marker_gated_types(self):
        """Test Decision/Feature nodes need explicit markers."""
        response = json.dumps(
            {
                "nodes": [
                    {"id": "meeting-evt-42", "type": "Meeting", "content": "Sprint Review"},
                    {"id": "meeting-extra", "type": "Meeting", "content": "Follow-up"},
                    {"id": "decision-dark-mode", "type": "Decision", "content": "Ship dark mode"},
                    {"id": "feature-export", "type": "Feature", "content": "CSV export"},
                    {"id": "bug-sync", "type": "Bug", "content": "Sync bug"},
                ],
                "edges": [
                    {"source": "decision-dark-mode", "target": "meeting-evt-42", "type": "RELATES_TO"},
                    {"source": "feature-export", "target": "meeting-evt-42", "type": "RELATES_TO"},
                    {"source": "bug-sync", "target": "meeting-extra", "type": "RELATES_TO"},
                ],
            }
        )
        event = make_event(description="DECISION: ship dark mode in v2")
        extractor = CalendarExtractor(StubCompletionClient(response), clock=fixed_clock)

        result = await extractor.extract(calendar_event_state(event))

        assert result.output.node_ids() == ["meeting-evt-42", "decision-dark-mode"]
        assert [e.source for e in result.output.edges] == ["decision-dark-mode"]

    @pytest.mark.asyncio
    async def test_prompt_contents(self):
        """Test the strict calendar rules and timestamp reach the model."""
        client = StubCompletionClient()
        state = calendar_event_state(make_event())
        await CalendarExtractor(client, clock=fixed_clock).extract(state)

        system_prompt, user_prompt = client.calls[0]
        assert "exactly ONE 'Meeting' node" in system_prompt
        assert '"meeting-{EVENT_ID}"' in system_prompt
        assert "Do NOT infer assignments, deadlines" in system_prompt
        assert SYNCED_AT in system_prompt
        assert user_prompt.startswith("SOURCE: CALENDAR")
        assert "EVENT_ID: evt-42" in user_prompt

    @pytest.mark.asyncio
    async def test_model_failure_fails_open(self):
        """Test calendar extraction also degrades to an empty batch."""
        client = StubCompletionClient(TimeoutError("model timed out"))
        result = await CalendarExtractor(client).extract(calendar_event_state(make_event()))

        assert not result.success
        assert result.output.is_empty()

    @pytest.mark.asyncio
    async def test_missing_event_id(self):
        """Test a block without EVENT_ID produces nothing."""
        state = ExtractionState(messages=[Message(content="SOURCE: CALENDAR\nTITLE: Standup")])
        result = await CalendarExtractor(StubCompletionClient()).extract(state)
        assert result.output.is_empty()

    def test_parse_calendar_message(self):
        """Test parsing the indented block the calendar route produces."""
        text = (
            "SOURCE: CALENDAR\n"
            "  EVENT_ID: abc123\n"
            '  TITLE: "Client Call"\n'
            "  TIME: 10:00 - 11:00\n"
            "  DESCRIPTION: Agenda\n"
            "  FEATURE: exports\n"
            "  PARTICIPANTS: None"
        )
        fields = parse_calendar_message(text)

        assert fields["EVENT_ID"] == "abc123"
        assert fields["TITLE"] == "Client Call"
        assert fields["DESCRIPTION"] == "Agenda\nFEATURE: exports"
        assert fields["PARTICIPANTS"] == "None"


class TestStickyExtractor:
    """Tests for StickyExtractor."""

    @pytest.mark.asyncio
    async def test_sticky_node(self):
        """Test a sticky note becomes one Sticky node."""
        result = await StickyExtractor().extract(sticky_state("obj-9", "Write release notes", room_id="room-1"))

        assert result.success
        node = result.output.nodes[0]
        assert node.id == "sticky-obj-9"
        assert node.type == NodeType.STICKY
        assert node.content == "Write release notes"
        assert node.metadata == {"source": "whiteboard", "objectId": "obj-9", "roomId": "room-1"}

    @pytest.mark.asyncio
    async def test_missing_object_id(self):
        """Test a sticky without an object id fails soft."""
        state = sticky_state("obj-1", "x")
        state.last_message.metadata.clear()

        result = await StickyExtractor().extract(state)

        assert not result.success
        assert result.output.is_empty()

    @pytest.mark.asyncio
    async def test_ignores_other_provenance(self):
        """Test chat messages are not turned into stickies."""
        result = await StickyExtractor().extract(chat_state("hello"))
        assert result.output.is_empty()
