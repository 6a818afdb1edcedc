"""Client for an Assistants-style HTTP API: threads, messages, vector stores, models, moderation and speech."""

__version__ = "0.1.0"