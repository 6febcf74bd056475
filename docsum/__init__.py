"""Document summarization service: LLM completions with an extractive fallback."""

__version__ = "0.1.0"
