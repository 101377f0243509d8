"""Extraction prompts and schema constants for knowledge graph extraction."""

CHAT_NODE_TYPES = ["Decision", "Feature", "Bug", "Tech", "Meeting", "Person"]

CHAT_EDGE_TYPES = ["RELATES_TO", "BLOCKED_BY", "SCHEDULED_FOR"]

CALENDAR_NODE_TYPES = ["Meeting", "Person", "Decision", "Feature"]

# Node types a calendar event may only produce when the description
# carries the matching marker.
CALENDAR_MARKERS = {
    "Decision": "DECISION:",
    "Feature": "FEATURE:",
}

CHAT_SYSTEM_PROMPT = "You are a knowledge graph extractor."

CHAT_EXAMPLE_INPUT = "We need to fix the login bug by tomorrow's meeting."

CHAT_EXAMPLE_OUTPUT = """{
  "nodes": [
    {"id": "bug-login", "type": "Bug", "content": "Login Bug"},
    {"id": "meeting-tomorrow", "type": "Meeting", "content": "Tomorrow's Meeting"}
  ],
  "edges": [
    {"source": "bug-login", "target": "meeting-tomorrow", "type": "SCHEDULED_FOR"}
  ]
}"""

# --- Chat prompt: permissive, every technical term becomes a node ---
CHAT_PROMPT = """You are a Knowledge Graph Extractor for a project management workspace.
Your job is to extract structured data from the following user message.

## Node Types (Entities)
- Decision: Any choice made (e.g., "Use React", "Approved design")
- Feature: Functionality linked to the project (e.g., "Dark Mode", "Chat")
- Bug: Problems mentioned (e.g., "Login failed")
- Tech: Tools/Libraries (e.g., "Next.js", "MongoDB")
- Meeting: Calendar events or discussions (e.g., "Daily Standup", "Client Call")
- Person: Team members mentioned

## Edge Types (Relationships)
- RELATES_TO: General connection
- BLOCKED_BY: Dependency
- SCHEDULED_FOR: Linking a task/topic to a meeting

## Rules
1. If the message mentions a technical term, CREATE A NODE for it.
2. If the message implies a plan, CREATE A NODE for the Goal/Feature.
3. Node ids are short, lowercase, hyphenated and stable (e.g., "bug-login").
4. Return valid JSON only, no markdown fences.

## Example
Input: "{example_input}"
Output:
{example_output}

## Message
"{message}"
"""

# --- Calendar prompt: strict, no inference beyond the literal event ---
CALENDAR_PROMPT = """You are a Strict Calendar Ingestion Agent.
Your job is to convert calendar events into Knowledge Graph nodes.

## Rules
1. You MUST create exactly ONE 'Meeting' node for the event.
2. The Meeting node id MUST be exactly "meeting-{{EVENT_ID}}", using the EVENT_ID given in the input.
3. The Meeting node content should be the Title + Time.
4. You MAY create 'Person' nodes for participants.
5. You MAY create 'Decision' or 'Feature' nodes ONLY if the description explicitly contains "DECISION:" or "FEATURE:".
6. Do NOT infer assignments, deadlines, or noise from general text.
7. All nodes derived from this event MUST have the following metadata:
   "metadata": {{
     "source": "calendar",
     "eventId": "{{EVENT_ID}}",
     "syncedAt": "{synced_at}"
   }}
8. Allowed edge types: RELATES_TO, SCHEDULED_FOR.
9. Return valid JSON only, no markdown fences.

## Input Format
SOURCE: CALENDAR
EVENT_ID: ...
TITLE: ...
TIME: ...
DESCRIPTION: ...
PARTICIPANTS: ...

## Output Format
{{
  "nodes": [{{
    "id": "meeting-xyz",
    "type": "Meeting",
    "content": "...",
    "metadata": {{"source": "calendar", "eventId": "...", "syncedAt": "..."}}
  }}],
  "edges": []
}}
"""


def build_chat_prompt(message: str) -> str:
    """Render the chat extraction prompt for one message."""
    return CHAT_PROMPT.format(
        example_input=CHAT_EXAMPLE_INPUT,
        example_output=CHAT_EXAMPLE_OUTPUT,
        message=message,
    )


def build_calendar_prompt(synced_at: str) -> str:
    """Render the calendar system prompt with the sync timestamp."""
    return CALENDAR_PROMPT.format(synced_at=synced_at)
