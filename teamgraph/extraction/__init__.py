"""Structured extraction support: prompts and parsing of model output."""

from .structured_extractor import coerce_batch, load_graph_json, strip_code_fences

__all__ = ["coerce_batch", "load_graph_json", "strip_code_fences"]
