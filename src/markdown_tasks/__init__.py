"""Turn rough task notes into markdown checklist items with an LLM."""

__version__ = "0.1.0"
