"""PageMind: retrieval-augmented question answering over web pages."""

__version__ = "0.1.0"
