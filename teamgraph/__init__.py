"""
teamgraph - knowledge graph extraction and retrieval for team workspaces.

Core modules:
- schema: Node/Edge type definitions and batch containers
- agents: LLM-based extractors (chat, calendar) and the sticky extractor
- extraction: Prompts and parsing of untrusted model output
- store: Graph store backends and the persistence adapter
- traversal: Bounded subgraph retrieval
- linking: Sticky-to-task linking
- pipeline: Orchestration and state management
"""

__version__ = "0.1.0"
