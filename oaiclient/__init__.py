"""Client pieces for an assistants-style chat API: resources, streams, rate limits and checks."""

__version__ = "0.1.0"